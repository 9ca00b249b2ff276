"""Print backend registry

Backends are registered under a string key at import time::

    @register_backend('printnode')
    class PrintNodeBackend(PrintBackend):
        ...

A provider's implementation record names the key of the backend to use.
"""

import logging
from odoo.tools.translate import _
from ..exceptions import (EmptyImplementationClass, MissingImplementation,
                          NotABackend, ResolutionFailed)
from .base import PrintBackend

_logger = logging.getLogger(__name__)

_factories = {}


def register_backend(key):
    """Decorator registering a backend factory (usually a class)"""
    def decorator(factory):
        existing = _factories.get(key)
        if existing is not None and existing is not factory:
            _logger.warning("Print backend %r already registered by %r; "
                            "overwriting with %r", key, existing, factory)
        _factories[key] = factory
        return factory
    return decorator


def unregister_backend(key):
    """Remove a backend factory"""
    _factories.pop(key, None)


def backend_keys():
    """Get registered backend keys"""
    return sorted(_factories)


def resolve_backend(provider):
    """Instantiate the backend configured for ``provider``

    Resolution is performed afresh on every call.
    """
    implementation = provider.implementation_id
    if not implementation:
        raise MissingImplementation(
            _("Print provider %s has no implementation") % provider.name
        )
    key = (implementation.backend or '').strip()
    if not key:
        raise EmptyImplementationClass(
            _("Implementation %s does not specify a backend") %
            implementation.name
        )
    factory = _factories.get(key)
    if factory is None:
        _logger.error("Unknown print backend %r", key)
        raise ResolutionFailed(_("Cannot resolve print backend %s") % key)
    if isinstance(factory, type) and not issubclass(factory, PrintBackend):
        raise NotABackend(_("%s is not a print backend") % factory.__name__)
    try:
        backend = factory()
    except Exception as exc:
        _logger.error("Cannot instantiate print backend %r: %s", key, exc)
        raise ResolutionFailed(
            _("Cannot resolve print backend %s") % key
        ) from exc
    if not isinstance(backend, PrintBackend):
        raise NotABackend(_("%s is not a print backend") %
                          type(backend).__name__)
    return backend
