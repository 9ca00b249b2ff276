"""Label rendering"""

import logging
import os
import tempfile
from lxml import etree
from odoo import api, models
from odoo.addons.base.models.ir_qweb import QWebException
from odoo.tools.translate import _
from ..exceptions import PrintProviderError, UnsupportedTemplateExtension

_logger = logging.getLogger(__name__)

CPCL_NS = 'http://www.fensystems.co.uk/xmlns/cpcl'

LABEL_SUFFIXES = {
    '.xml': '.pdf',
    '.cpcl': '.cpcl',
}


class IrActionsReport(models.Model):
    """Render label templates stored as files"""

    _inherit = 'ir.actions.report'

    @staticmethod
    def add_print_qty(cpcl, copies):
        """ Searches the CPCL tree for the print statement and adds
        the number of copies to it if it is not already present
        """
        prints = cpcl.findall("{%s}print" % CPCL_NS)
        if copies > 1 and prints:
            for el in prints:
                if not el.attrib.get('qty', False):
                    el.set('qty', str(copies))
        return cpcl

    @staticmethod
    def strip_data_attributes(cpcl):
        """Remove QWeb ``data-*`` attributes"""
        for element in cpcl.iter():
            attrs = element.attrib
            remove = [x for x in attrs if x.startswith('data-')]
            for attr in remove:
                del attrs[attr]
        return cpcl

    @api.model
    def _render_label_pdf(self, template, values):
        """Render HTML label template to PDF"""
        html = self.env['ir.qweb']._render(template, values)
        return self._run_wkhtmltopdf([html])

    @api.model
    def _render_label_cpcl(self, template, values):
        """Render CPCL/XML label template"""
        html = self.env['ir.qweb']._render(template, values)
        cpcl = self.strip_data_attributes(etree.fromstring(str(html).encode()))
        cpcl = self.add_print_qty(cpcl, int(values.get('copies') or 1))
        return etree.tostring(cpcl, xml_declaration=True, encoding='UTF-8')

    @api.model
    def _render_label_file(self, path, record, values):
        """Render label template file for a record

        The template is a QWeb template: ``.xml`` files produce PDF labels
        and ``.cpcl`` files produce CPCL/XML labels.  The rendered label
        is written to a temporary file, whose path is returned.
        """
        extension = os.path.splitext(path)[1].lower()
        if extension not in LABEL_SUFFIXES:
            raise UnsupportedTemplateExtension(
                _("Unsupported label template type: %s") % path
            )
        try:
            template = etree.parse(path).getroot()
        except (OSError, etree.XMLSyntaxError) as exc:
            raise PrintProviderError(
                _("Error loading label template %s: %s") % (path, exc)
            ) from exc
        qweb_values = dict(values, doc=record, docs=record)
        try:
            if extension == '.cpcl':
                document = self._render_label_cpcl(template, qweb_values)
            else:
                document = self._render_label_pdf(template, qweb_values)
        except (QWebException, etree.XMLSyntaxError) as exc:
            raise PrintProviderError(
                _("Error rendering label template %s: %s") % (path, exc)
            ) from exc
        fd, filename = tempfile.mkstemp(prefix='odoo-label-',
                                        suffix=LABEL_SUFFIXES[extension])
        with os.fdopen(fd, 'wb') as f:
            f.write(document)
        _logger.debug("Rendered %s to %s", path, filename)
        return filename
