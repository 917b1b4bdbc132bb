class NotificationError(Exception):
    """A confirmation email could not be handed to the email provider."""
