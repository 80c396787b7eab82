"""Exception hierarchy shared by the adapters."""


class GemvoxError(Exception):
    """Base class for errors raised by gemvox adapters."""


class ReplyServiceError(GemvoxError):
    """The generative text backend failed to produce a reply."""


class SpeechError(GemvoxError):
    """A speech engine could not be driven."""


class PreferenceStoreError(GemvoxError):
    """The preference store could not be read or written."""
