"""Print label wizard"""

from odoo import api, fields, models


class PrintLabelWizard(models.TransientModel):
    """Print labels for the selected records"""

    _name = 'print.label.wizard'
    _description = 'Print Labels'

    provider_id = fields.Many2one('print.provider', string="Print Provider",
                                  required=True)
    printer_id = fields.Many2one('print.printer', string="Printer",
                                 required=True,
                                 domain="[('provider_id', '=', provider_id)]")
    copies = fields.Integer(string="Copies", required=True, default=1)
    res_model = fields.Char(string="Model", required=True)
    res_ids = fields.Json(string="Records")

    @api.model
    def default_get(self, fields_list):
        vals = super().default_get(fields_list)
        context = self.env.context
        if context.get('active_model'):
            vals.setdefault('res_model', context['active_model'])
            vals.setdefault('res_ids', context.get('active_ids') or
                            [context.get('active_id')])
        if 'provider_id' in fields_list and not vals.get('provider_id'):
            vals['provider_id'] = self.env['print.provider'].search(
                [], order='name', limit=1
            ).id
        if 'printer_id' in fields_list and not vals.get('printer_id'):
            vals['printer_id'] = self._default_printer(
                vals.get('provider_id')
            ).id
        return vals

    @api.model
    def _default_printer(self, provider_id):
        """Get default printer for a provider"""
        if not provider_id:
            return self.env['print.printer']
        return self.env['print.printer'].search([
            ('provider_id', '=', provider_id),
        ], order='is_default desc, name', limit=1)

    @api.onchange('provider_id')
    def _onchange_provider_id(self):
        """Select default printer of newly selected provider"""
        if self.printer_id.provider_id != self.provider_id:
            self.printer_id = self._default_printer(self.provider_id.id)

    def action_print(self):
        """Print labels"""
        self.ensure_one()
        return self.env['print.provider'].print_labels({
            'provider': self.provider_id.id,
            'entity_name': self.res_model,
            'record_ids': self.res_ids or [],
            'printer': self.printer_id.id,
            'copies': self.copies,
        })
