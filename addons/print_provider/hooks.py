"""Label generation hooks

Hooks allow other addons to add or modify the parameters passed to the
label renderer for specific models, without knowing which print backend
is in use.  A hook declares the models it applies to and a priority;
lower priorities run first::

    @register_hook
    class ShipmentLabelHook(GenerateLabelHook):

        priority = 50

        def tables_to_which_it_applies(self):
            return ['stock.picking']

        def execute(self, context):
            picking = context.record
            context.add_parameter('carrier', picking.carrier_id.name)
"""

from dataclasses import dataclass, field
import logging
from types import MappingProxyType
from odoo.tools.translate import _
from .exceptions import PrintProviderError

_logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 100

_hooks = []


@dataclass
class GenerationContext:
    """State shared by all hooks while generating one label"""

    provider: object
    table: object
    record_id: int
    template_line: object
    json_parameters: dict = field(default_factory=dict)
    parameters: dict = field(default_factory=dict)

    def __post_init__(self):
        # Caller-supplied parameters are never modified by hooks
        self.json_parameters = MappingProxyType(dict(self.json_parameters))

    @property
    def record(self):
        """Record for which the label is generated"""
        return self.table.env[self.table.model].browse(self.record_id)

    def add_parameter(self, key, value):
        """Add or overwrite a renderer parameter"""
        self.parameters[key] = value

    def get_parameter(self, key):
        """Get current value of a renderer parameter (or None)"""
        return self.parameters.get(key)


class GenerateLabelHook:
    """Base class for label generation hooks"""

    priority = DEFAULT_PRIORITY

    def tables_to_which_it_applies(self):
        """Return the model names (e.g. ``stock.picking``) this hook handles"""
        raise NotImplementedError

    def execute(self, context):
        """Add or modify parameters in ``context``"""
        raise NotImplementedError


def register_hook(cls):
    """Class decorator registering an instance of a hook"""
    _hooks.append(cls())
    return cls


def unregister_hook(cls):
    """Remove all registered instances of a hook class"""
    _hooks[:] = [x for x in _hooks if not isinstance(x, cls)]


def registered_hooks():
    """Return the hooks registered so far, in registration order"""
    return list(_hooks)


class GenerateLabelHookManager:
    """Run applicable hooks in priority order against a generation context

    The hooks are passed in explicitly.  Execution is a fail-fast chain:
    the first failing hook aborts the remaining ones, and nothing done by
    earlier hooks is undone.
    """

    def __init__(self, hooks):
        self.hooks = list(hooks)

    def applicable_hooks(self, table):
        """Get hooks applicable to ``table``, sorted by priority"""
        applicable = []
        for hook in self.hooks:
            try:
                if table.model in hook.tables_to_which_it_applies():
                    applicable.append(hook)
            except Exception as exc:  # pylint: disable=broad-except
                _logger.warning("Error checking applicability of hook %s "
                                "for %s: %s", type(hook).__name__,
                                table.model, exc)
        # sorted() is stable: registration order breaks priority ties
        return sorted(applicable, key=lambda x: x.priority)

    def execute_hooks(self, context):
        """Execute all applicable hooks"""
        table = context.table
        if not table:
            _logger.warning("No model in generation context, skipping hooks")
            return
        hooks = self.applicable_hooks(table)
        if not hooks:
            _logger.debug("No applicable hooks for %s", table.model)
            return
        _logger.debug("Executing %d hooks for %s", len(hooks), table.model)
        for hook in hooks:
            _logger.debug("Executing hook %s (priority %s)",
                          type(hook).__name__, hook.priority)
            try:
                hook.execute(context)
            except PrintProviderError:
                raise
            except Exception as exc:
                raise PrintProviderError(
                    _("Hook %s failed: %s") % (type(hook).__name__, exc)
                ) from exc
        _logger.debug("All hooks executed for %s", table.model)
