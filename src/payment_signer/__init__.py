from .signer import PaymentRequestSigner

__all__ = ["PaymentRequestSigner"]
