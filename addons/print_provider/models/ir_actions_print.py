"""Print label actions"""

import logging
from odoo import fields, models

_logger = logging.getLogger(__name__)


class IrActionsServer(models.Model):
    """Print label actions.

       Raised in the context of a modelled object, a print label action
       generates a label for each selected record using the label
       template of the object's model, and sends the labels to the
       configured printer via its print provider.
    """

    _inherit = 'ir.actions.server'

    state = fields.Selection(selection_add=[('print_label', 'Print Label')],
                             ondelete={'print_label': 'cascade'})

    print_printer_id = fields.Many2one('print.printer', string="Printer",
                                       ondelete='cascade')
    print_copies = fields.Integer(string="Copies", default=1)

    _sql_constraints = [(
        'print_label_printer',
        "CHECK (NOT (state = 'print_label' AND print_printer_id IS NULL))",
        'Printer must be set',
    )]

    def _run_action_print_label_multi(self, eval_context=None):
        """Print labels for the context objects"""
        # pylint: disable=unused-argument
        context = self.env.context
        if context.get('skip_printing'):
            _logger.info('Skipping printing due to context switch')
            return False
        active_model = context.get('active_model') or self.model_id.model
        active_ids = context.get('active_ids') or [context.get('active_id')]
        active_ids = [x for x in active_ids if x]
        printer = self.print_printer_id
        _logger.info('executing %s action for %s ids %s on %s',
                     self.state, active_model, active_ids, printer.name)
        return self.env['print.provider'].print_labels({
            'provider': printer.provider_id.id,
            'entity_name': active_model,
            'record_ids': active_ids,
            'printer': printer.id,
            'copies': self.print_copies,
        })
