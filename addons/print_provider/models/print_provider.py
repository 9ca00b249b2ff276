"""Print providers"""

import logging
from odoo import api, fields, models
from odoo.exceptions import UserError
from odoo.tools.translate import _
from ..backends import resolve_backend
from ..exceptions import PrintProviderError
from .. import tools

_logger = logging.getLogger(__name__)


class PrintProviderImplementation(models.Model):
    """Print provider implementation

    Names the print backend (as registered via
    :func:`~odoo.addons.print_provider.backends.register_backend`) used
    by print providers.
    """

    _name = 'print.provider.implementation'
    _description = 'Print Provider Implementation'
    _order = 'name'

    name = fields.Char(string="Name", required=True)
    backend = fields.Char(string="Backend",
                          help="Registry key of the print backend")


class PrintProviderParam(models.Model):
    """Named print provider parameter (endpoint URL, credentials, etc)"""

    _name = 'print.provider.param'
    _description = 'Print Provider Parameter'
    _order = 'provider_id, key'
    _rec_name = 'key'

    provider_id = fields.Many2one('print.provider', string="Print Provider",
                                  index=True, required=True,
                                  ondelete='cascade')
    key = fields.Char(string="Search Key", index=True, required=True)
    content = fields.Char(string="Content")

    _sql_constraints = [
        ('key_uniq', 'unique (provider_id, key)',
         "The Search Key must be unique per print provider"),
    ]


class PrintProvider(models.Model):
    """Print provider

    A configured instance of a print backend, with the named parameters
    (endpoint URLs, API keys, etc) required by that backend.
    """

    _name = 'print.provider'
    _description = 'Print Provider'
    _order = 'name'

    name = fields.Char(string="Name", required=True, index=True)
    implementation_id = fields.Many2one('print.provider.implementation',
                                        string="Implementation",
                                        ondelete='restrict')
    param_ids = fields.One2many('print.provider.param', 'provider_id',
                                string="Parameters")
    printer_ids = fields.One2many('print.printer', 'provider_id',
                                  string="Printers")
    printer_count = fields.Integer(string="Printer Count",
                                   compute='_compute_printer_count')
    active = fields.Boolean(string="Active", default=True)

    @api.depends('printer_ids')
    def _compute_printer_count(self):
        """Count active printers"""
        for provider in self:
            provider.printer_count = len(provider.printer_ids)

    def _get_required_param(self, key):
        """Get named parameter (case-insensitive)"""
        self.ensure_one()
        if not key:
            raise UserError(_("Missing parameter: %s") % 'key')
        # Parameters hold credentials hidden from ordinary users
        param = self.env['print.provider.param'].sudo().search([
            ('provider_id', '=', self.id),
            ('key', '=ilike', key),
        ], limit=1)
        if not param:
            raise UserError(_("Print provider parameter %s not found") % key)
        return param

    def _get_param_content(self, key):
        """Get non-blank content of named parameter"""
        param = self._get_required_param(key)
        if not (param.content or '').strip():
            raise UserError(_("Print provider parameter %s has no content") %
                            key)
        return param.content

    def _backend(self):
        """Resolve print backend"""
        self.ensure_one()
        return resolve_backend(self)

    def update_printers(self):
        """Refresh printers from the print provider

        Returns a notification client action describing the outcome.
        """
        self.ensure_one()
        _logger.debug("Updating printers of %s", self.name)
        try:
            with self.env.cr.savepoint():
                remote = self._backend().fetch_printers(self)
                counters = self.env['print.printer']._reconcile(self, remote)
                self.env.flush_all()
        except PrintProviderError as exc:
            _logger.exception("Cannot update printers of %s", self.name)
            return tools.notification(_("Provider error: %s") % exc,
                                      tools.DANGER, sticky=True)
        except Exception as exc:  # pylint: disable=broad-except
            _logger.exception("Cannot update printers of %s", self.name)
            return tools.notification(str(exc), tools.DANGER, sticky=True)
        return tools.notification(
            _("Printers updated. Created=%s, Updated=%s, Inactivated=%s") %
            (counters.created, counters.updated, counters.inactivated)
        )

    def action_update_printers(self):
        """Refresh printers (button)"""
        return self.update_printers()

    @api.model
    def _cron_update_printers(self):
        """Refresh printers of all active providers"""
        for provider in self.search([]):
            result = provider.update_printers()
            params = result['params']
            if params['type'] != tools.SUCCESS:
                _logger.warning("Scheduled printer update of %s failed: %s",
                                provider.name, params['message'])

    @api.model
    def print_labels(self, parameters):
        """Generate labels for records and send them to a printer

        Expected parameters:

        * ``provider``: print provider ID
        * ``entity_name``: model name (e.g. ``stock.picking``)
        * ``record_ids``: list of record IDs
        * ``printer``: printer ID
        * ``copies``: number of copies

        The whole parameter dictionary is also made available to label
        generation hooks.  Records are printed one at a time; a failure
        to print one record does not prevent printing the others.
        Returns a notification client action describing the outcome.
        """
        _logger.debug("Sending generated labels to printer: %s", parameters)
        try:
            with self.env.cr.savepoint():
                return self._print_labels(parameters)
        except PrintProviderError as exc:
            _logger.exception("Cannot print labels")
            return tools.notification(_("Provider error: %s") % exc,
                                      tools.DANGER, sticky=True)
        except Exception as exc:  # pylint: disable=broad-except
            _logger.exception("Cannot print labels")
            return tools.notification(str(exc), tools.DANGER, sticky=True)

    @api.model
    def _print_labels(self, parameters):
        """Generate labels and send them to a printer"""
        # pylint: disable=too-many-locals
        provider_id = tools.require_param(parameters, 'provider')
        entity_name = tools.require_param(parameters, 'entity_name')
        record_ids = tools.require_list(parameters, 'record_ids')
        printer_id = tools.require_param(parameters, 'printer')
        copies = tools.require_positive_int(parameters, 'copies')

        provider = self.browse(int(provider_id)).exists()
        if not provider:
            raise UserError(_("Print provider not found"))
        backend = provider._backend()
        printer = self.env['print.printer'].browse(int(printer_id)).exists()
        if not printer:
            raise UserError(_("Printer %s not found") % printer_id)
        table = self.env['ir.model']._get(entity_name)
        if not table:
            raise UserError(_("Model %s not found") % entity_name)
        Template = self.env['print.provider.template']
        template_line = Template._resolve_template_line(table)

        job_ids = []
        failures = 0
        for record_id in record_ids:
            path = None
            try:
                with self.env.cr.savepoint():
                    path = backend.generate_label(provider, table,
                                                  int(record_id),
                                                  template_line, parameters)
                    job_id = backend.send_to_printer(provider, printer,
                                                     copies, path)
                job_ids.append(job_id or '-')
            except Exception:  # pylint: disable=broad-except
                _logger.exception("Error printing %s %s on printer %s",
                                  entity_name, record_id, printer.name)
                failures += 1
            finally:
                tools.safe_delete(path, record_id)

        if failures and failures == len(record_ids):
            return tools.notification(_("All print jobs failed"),
                                      tools.DANGER, sticky=True)
        if failures:
            return tools.notification(_("%s print jobs failed") % failures,
                                      tools.WARNING)
        _logger.debug("Sent print jobs %s", job_ids)
        return tools.notification(_("Print job sent: %s") % ', '.join(job_ids))
