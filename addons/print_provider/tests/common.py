"""Print provider tests"""

import pathlib
import shutil
import tempfile
from unittest.mock import patch
from odoo.tests import common, tagged
from odoo.tools import config
from ..backends import (PrintBackend, RemotePrinter, register_backend,
                        render_label, unregister_backend)
from ..exceptions import PrintProviderError

MOCK_PDF = b'%PDF-1.4 mock label'
FILES = pathlib.Path(__file__).parent / 'files'
PROVIDER_LOGGER = 'odoo.addons.print_provider.models.print_provider'


class MockBackend(PrintBackend):
    """Print backend recording the print jobs sent to it"""

    remote_printers = []
    sent = []
    fail_records = ()

    def fetch_printers(self, provider):
        return list(self.remote_printers)

    def generate_label(self, provider, table, record_id, template_line,
                       parameters):
        if record_id in self.fail_records:
            raise PrintProviderError("Cannot render %s" % record_id)
        return render_label(provider, table, record_id, template_line,
                            parameters)

    def send_to_printer(self, provider, printer, copies, path):
        with open(path, 'rb') as f:
            self.sent.append((printer, copies, path, f.read()))
        return 'job-%d' % len(self.sent)


@tagged('post_install', '-at_install')
class PrinterCase(common.TransactionCase):
    """Base test case for printing"""

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        Implementation = cls.env['print.provider.implementation']
        Provider = cls.env['print.provider']
        Printer = cls.env['print.printer']
        Partner = cls.env['res.partner']

        # Create providers
        cls.implementation_mock = Implementation.create({
            'name': "Mock",
            'backend': 'mock',
        })
        cls.provider = Provider.create({
            'name': "Mock provider",
            'implementation_id': cls.implementation_mock.id,
        })
        cls.provider_other = Provider.create({
            'name': "Other provider",
            'implementation_id': cls.implementation_mock.id,
        })

        # Create printers
        cls.printer_laser = Printer.create({
            'name': "Laser",
            'external_id': 'laser',
            'provider_id': cls.provider.id,
        })

        # Create label template for partners
        cls.model_partner = cls.env['ir.model']._get('res.partner')
        cls.template = cls.env['print.provider.template'].create({
            'name': "Partner label",
            'model_id': cls.model_partner.id,
            'line_ids': [(0, 0, {
                'location': '@basedesign@/partner_label.xml',
                'is_default': True,
            })],
        })
        cls.template_line = cls.template.line_ids

        # Create partners
        cls.partner_alice = Partner.create({'name': "Alice"})
        cls.partner_bob = Partner.create({'name': "Bob"})

    def setUp(self):
        super().setUp()

        # Register mock print backend
        register_backend('mock')(MockBackend)
        self.addCleanup(unregister_backend, 'mock')
        patch_sent = patch.object(MockBackend, 'sent', [])
        patch_sent.start()
        self.addCleanup(patch_sent.stop)

        # Create temporary template roots
        self.tempdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tempdir.cleanup)
        root = pathlib.Path(self.tempdir.name)
        self.design_root = root / 'design'
        self.web_root = root / 'web'
        self.design_root.mkdir()
        self.web_root.mkdir()
        patch_config = patch.dict(config.misc, {'print_provider': {
            'design_root': str(self.design_root),
            'web_root': str(self.web_root),
        }})
        patch_config.start()
        self.addCleanup(patch_config.stop)

        # Patch PDF generation
        patch_wkhtmltopdf = patch.object(
            type(self.env['ir.actions.report']), '_run_wkhtmltopdf',
            autospec=True, return_value=MOCK_PDF,
        )
        self.mock_wkhtmltopdf = patch_wkhtmltopdf.start()
        self.addCleanup(patch_wkhtmltopdf.stop)

    def install_template(self, filename, root=None, subdir=''):
        """Copy test template file into a template root"""
        directory = (root or self.web_root) / subdir
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        shutil.copy(FILES / filename, path)
        return path

    def remote(self, *printers):
        """Patch printers reported by the mock print backend"""
        remote = [RemotePrinter(*x) for x in printers]
        patch_remote = patch.object(MockBackend, 'remote_printers', remote)
        patch_remote.start()
        self.addCleanup(patch_remote.stop)
        return remote

    def assertNotification(self, result, kind, message):
        """Assert that result is a notification of the specified type"""
        self.assertEqual(result['tag'], 'display_notification')
        self.assertEqual(result['params']['type'], kind)
        self.assertEqual(result['params']['message'], message)
