class PaymentError(Exception):
    """Base class for errors raised while handling gateway payments."""


class PaymentVerificationError(PaymentError):
    """Missing notification fields or a signature that does not match."""


class AnswerParseError(PaymentError):
    """The signed ``kr-answer`` could not be trusted as a payment answer."""


class InvalidAnswerJson(AnswerParseError):
    pass


class UnexpectedAnswerShape(AnswerParseError):
    pass


class PaymentStorageError(PaymentError):
    """The payment record could not be written; the notification is not acknowledged."""


class GatewayError(PaymentError):
    """A call to the payment gateway API failed."""
