"""Print provider errors"""

from odoo.exceptions import UserError


class PrintProviderError(UserError):
    """Failure reported by a print provider or by its configuration

    Transport, parsing and provider-side rejections all surface as this
    error (or one of its subclasses), carrying a human-readable message.
    The underlying cause, if any, is chained via ``raise ... from``.
    """


class MissingImplementation(PrintProviderError):
    """Provider has no implementation attached"""


class EmptyImplementationClass(PrintProviderError):
    """Provider implementation does not name a backend"""


class ResolutionFailed(PrintProviderError):
    """Backend could not be loaded or instantiated"""


class NotABackend(PrintProviderError):
    """Loaded object does not implement the print backend contract"""


class PrintLocationNotFound(PrintProviderError):
    """No label template is configured for a model"""


class EmptyTemplateLocation(PrintProviderError):
    """Template line has no location"""


class TemplateNotFound(PrintProviderError):
    """Template file exists under neither template root"""


class UnsupportedTemplateExtension(PrintProviderError):
    """Template file type cannot be rendered"""
