"""Printers"""

from collections import namedtuple
import logging
from odoo import api, fields, models

_logger = logging.getLogger(__name__)

ReconcileCounters = namedtuple('ReconcileCounters',
                               ['created', 'updated', 'inactivated'])


class Printer(models.Model):
    """Printer made available by a print provider

    Printers are created, updated and archived only by synchronising with
    the print provider (see :meth:`_reconcile`).  The natural key of a
    printer is its provider together with the provider's own identifier
    for the printer (``external_id``).
    """

    _name = 'print.printer'
    _description = 'Printer'
    _order = 'provider_id, is_default desc, name'

    name = fields.Char(string="Name", index=True, required=True)
    external_id = fields.Char(string="External ID", index=True, required=True,
                              help="Identifier of the printer within the "
                                   "print provider")
    is_default = fields.Boolean(string="Provider Default", default=False)
    provider_id = fields.Many2one('print.provider', string="Print Provider",
                                  index=True, required=True,
                                  ondelete='cascade')
    active = fields.Boolean(string="Active", default=True)

    _sql_constraints = [
        ('external_id_uniq', 'unique (provider_id, external_id)',
         "The External ID must be unique per print provider"),
    ]

    @api.model
    def _reconcile(self, provider, remote_printers):
        """Synchronise printers of ``provider`` with a remote printer list

        Printers missing locally are created and existing printers are
        overwritten with the remote name and default flag.  Active local
        printers absent from the remote list are archived.  An empty
        remote list therefore archives every printer of the provider.
        """
        Printer = self.with_context(active_test=False)
        seen = set()
        created = updated = 0

        for remote in remote_printers:
            seen.add(remote.id)
            existing = Printer.search([
                ('provider_id', '=', provider.id),
                ('external_id', '=', remote.id),
            ], limit=1)
            if not existing:
                Printer.create({
                    'external_id': remote.id,
                    'name': remote.name,
                    'is_default': remote.is_default,
                    'provider_id': provider.id,
                })
                created += 1
            else:
                existing.write({
                    'name': remote.name,
                    'is_default': remote.is_default,
                    'active': True,
                })
                updated += 1

        # Archive printers no longer reported by the provider
        domain = [('provider_id', '=', provider.id), ('active', '=', True)]
        if seen:
            domain.append(('external_id', 'not in', list(seen)))
        missing = Printer.search(domain)
        missing.write({'active': False})
        inactivated = len(missing)

        _logger.info("Printers of %s: %d created, %d updated, %d archived",
                     provider.name, created, updated, inactivated)
        return ReconcileCounters(created, updated, inactivated)
