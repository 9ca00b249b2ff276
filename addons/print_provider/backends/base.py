"""Print backend contract"""

from collections import namedtuple
import logging
import os
from odoo.exceptions import UserError
from odoo.tools.translate import _
from ..exceptions import EmptyTemplateLocation
from ..hooks import GenerateLabelHookManager, GenerationContext, registered_hooks

_logger = logging.getLogger(__name__)

RemotePrinter = namedtuple('RemotePrinter', ['id', 'name', 'is_default'])
RemotePrinter.__doc__ = """Printer as reported by a print backend"""


class PrintBackend:
    """Print backend

    A print backend encapsulates everything specific to one way of
    printing (a cloud print API, a local spooler, etc.):

    * listing the printers currently available (:meth:`fetch_printers`)
    * rendering a label for a record (:meth:`generate_label`)
    * sending a rendered label to a printer (:meth:`send_to_printer`)

    The base class is inert: it reports no printers and raises
    :class:`NotImplementedError` for the other operations, so that a
    partially implemented backend degrades predictably.

    Backends are instantiated afresh for each use and must hold no
    mutable state.  Any transport, parsing or provider-side failure must
    be raised as a
    :class:`~odoo.addons.print_provider.exceptions.PrintProviderError`.
    """

    def fetch_printers(self, provider):
        """Return list of :class:`RemotePrinter` known to ``provider``"""
        # pylint: disable=unused-argument
        return []

    def generate_label(self, provider, table, record_id, template_line,
                       parameters):
        """Render label for a record, returning the path of a temporary file"""
        # pylint: disable=too-many-arguments
        raise NotImplementedError(
            "generate_label not implemented by %s" % type(self).__name__
        )

    def send_to_printer(self, provider, printer, copies, path):
        """Send rendered label to a printer, returning the print job ID"""
        raise NotImplementedError(
            "send_to_printer not implemented by %s" % type(self).__name__
        )


def render_label(provider, table, record_id, template_line, parameters):
    """Render label via the label templates and hooks

    The template file is resolved from ``template_line``, the base
    parameters ``DOCUMENT_ID`` and ``SUBREPORT_DIR`` are filled in, all
    applicable hooks are executed, and the result is rendered to a
    temporary file whose path is returned.
    """
    # pylint: disable=too-many-arguments
    if not template_line:
        raise EmptyTemplateLocation(_("Label template location is empty"))
    path = template_line._resolve_template_file()
    directory = os.path.dirname(os.path.abspath(path))
    context = GenerationContext(
        provider=provider,
        table=table,
        record_id=record_id,
        template_line=template_line,
        json_parameters=parameters or {},
        parameters={
            'DOCUMENT_ID': record_id,
            'SUBREPORT_DIR': os.path.join(directory, ''),
        },
    )
    record = context.record.exists()
    if not record:
        raise UserError(_("Record %s of %s not found") %
                        (record_id, table.model))
    GenerateLabelHookManager(registered_hooks()).execute_hooks(context)
    _logger.info("Rendering %s for %s id %s", path, table.model, record_id)
    Report = provider.env['ir.actions.report']
    return Report._render_label_file(path, record, context.parameters)
