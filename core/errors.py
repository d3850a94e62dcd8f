"""Domain errors raised by services and rendered by the app-level handler."""


class VocabError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(VocabError):
    status_code = 404


class ValidationFailure(VocabError):
    status_code = 400


class PermissionDenied(VocabError):
    status_code = 403


class UpstreamFailure(VocabError):
    """Persistence or generation backend failed or timed out."""

    status_code = 502


class ParseFailure(VocabError):
    """The generation backend answered with text that could not be decoded."""

    status_code = 502


def describe_validation_errors(errors) -> str:
    """One line per pydantic error, ``location: message``, joined with ``; ``."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ())) or 'body'}: {err.get('msg', 'Invalid data')}"
        for err in errors
    )
