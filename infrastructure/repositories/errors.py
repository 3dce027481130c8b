class ReportRepositoryError(Exception):
    """Backend read or write failure, carrying the backend's message."""


def _error_message(e: Exception) -> str:
    message = getattr(e, "message", None)
    return message or str(e) or e.__class__.__name__
