"""Label templates"""

import logging
import os
from odoo import api, fields, models
from odoo.modules.module import get_module_path
from odoo.tools import config
from odoo.tools.translate import _
from ..exceptions import (EmptyTemplateLocation, PrintLocationNotFound,
                          TemplateNotFound)

_logger = logging.getLogger(__name__)

CONFIG_SECTION = 'print_provider'
TOKEN_BASEDESIGN = '@basedesign@'


def _strip_leading_slash(path):
    """Strip at most one leading path separator"""
    return path[1:] if path.startswith('/') else path


def _relative_path(location):
    """Convert template location to a path relative to a template root

    The location may start with ``@basedesign@`` (the shared design
    root itself) or ``@<module>@`` (a directory named after a module),
    or may be a plain relative path.
    """
    raw = location.strip()
    if raw.lower().startswith(TOKEN_BASEDESIGN):
        return _strip_leading_slash(raw[len(TOKEN_BASEDESIGN):])
    if raw.startswith('@'):
        second = raw.find('@', 1)
        if second > 1:
            module = raw[1:second]
            rest = _strip_leading_slash(raw[second + 1:])
            return '%s/%s' % (module, rest)
    return _strip_leading_slash(raw)


class PrintTemplate(models.Model):
    """Label template for a model"""

    _name = 'print.provider.template'
    _description = 'Label Template'
    _order = 'name'

    name = fields.Char(string="Name", required=True)
    model_id = fields.Many2one('ir.model', string="Model", required=True,
                               index=True, ondelete='cascade')
    model = fields.Char(related='model_id.model', string="Model Name")
    line_ids = fields.One2many('print.provider.template.line', 'template_id',
                               string="Template Lines")

    _sql_constraints = [
        ('model_uniq', 'unique (model_id)',
         "There must be only one label template per model"),
    ]

    @api.model
    def _resolve_template_line(self, table):
        """Select template line to use for ``table`` (an ``ir.model``)

        Default lines take precedence over other lines, followed by the
        lowest sequence number.  Returns an empty recordset if the
        template has no lines.
        """
        template = self.search([('model_id', '=', table.id)], limit=1)
        if not template:
            raise PrintLocationNotFound(
                _("No label template defined for %s") % table.name
            )
        return self.env['print.provider.template.line'].search([
            ('template_id', '=', template.id),
        ], order='is_default desc, sequence, id', limit=1)

    @api.model
    def _template_roots(self):
        """Get design root and web root directories, in search order"""
        design_root = config.get_misc(
            CONFIG_SECTION, 'design_root',
            os.path.join(config['data_dir'], 'print_provider', 'design'),
        )
        web_root = config.get_misc(
            CONFIG_SECTION, 'web_root',
            os.path.dirname(get_module_path('print_provider')),
        )
        return design_root, web_root


class PrintTemplateLine(models.Model):
    """Candidate template file for a label template"""

    _name = 'print.provider.template.line'
    _description = 'Label Template Line'
    _order = 'template_id, is_default desc, sequence, id'
    _rec_name = 'location'

    template_id = fields.Many2one('print.provider.template',
                                  string="Template", index=True,
                                  required=True, ondelete='cascade')
    location = fields.Char(string="Template Location",
                           help="Path of the template file, optionally "
                                "starting with @basedesign@ or @module@")
    is_default = fields.Boolean(string="Default", default=False)
    sequence = fields.Integer(string="Sequence", default=10)

    def _resolve_template_file(self):
        """Find template file on disk"""
        if not self or not (self.location or '').strip():
            raise EmptyTemplateLocation(_("Label template location is empty"))
        self.ensure_one()
        relative = _relative_path(self.location)
        candidates = [os.path.abspath(os.path.join(root, relative))
                      for root in self.template_id._template_roots()]
        for candidate in candidates:
            if os.path.exists(candidate):
                _logger.debug("Resolved %s to %s", self.location, candidate)
                return candidate
        raise TemplateNotFound(
            _("Label template not found (tried %s and %s)") %
            tuple(candidates)
        )
