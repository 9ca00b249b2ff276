"""PrintNode print backend tests"""

import base64
import json
from unittest.mock import Mock, patch
import requests
from odoo.tests.common import new_test_user
from odoo.tools import mute_logger
from ..backends import resolve_backend, transport
from ..backends.printnode import PrintNodeBackend, parse_printers
from ..exceptions import PrintProviderError
from .common import PrinterCase

PRINTERS = [
    {'id': 71, 'name': "Zebra", 'default': True},
    {'id': 72, 'name': "Dymo", 'default': False},
    {'id': 73, 'name': None},
]


class TestPrintNode(PrinterCase):
    """PrintNode print backend tests"""

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls.implementation_printnode = cls.env.ref(
            'print_provider.implementation_printnode'
        )
        cls.provider_printnode = cls.env['print.provider'].create({
            'name': "PrintNode",
            'implementation_id': cls.implementation_printnode.id,
            'param_ids': [
                (0, 0, {'key': 'PrintersURL',
                        'content': 'https://api.example.com/printers'}),
                (0, 0, {'key': 'PrintJobURL',
                        'content': 'https://api.example.com/printjobs'}),
                (0, 0, {'key': 'APIKey', 'content': 'abc'}),
            ],
        })
        cls.printer_zebra = cls.env['print.printer'].create({
            'name': "Zebra",
            'external_id': '71',
            'provider_id': cls.provider_printnode.id,
        })

    def setUp(self):
        super().setUp()
        self.session = Mock(spec=requests.Session)
        self.session.prepare_request.side_effect = lambda x: x
        patch_session = patch.object(transport, 'new_session',
                                     return_value=self.session)
        patch_session.start()
        self.addCleanup(patch_session.stop)
        self.backend = resolve_backend(self.provider_printnode)
        self.label = self.web_root / 'label.pdf'
        self.label.write_bytes(b'%PDF-1.4 label')

    def respond(self, status_code=200, text=''):
        """Set response to the next HTTP request"""
        self.session.send.return_value = Mock(status_code=status_code,
                                              text=text)

    def sent_request(self):
        """Get the HTTP request that was sent"""
        self.session.send.assert_called_once()
        return self.session.send.call_args[0][0]

    def param(self, key):
        """Get provider parameter"""
        return self.provider_printnode.param_ids.filtered(
            lambda x: x.key == key
        )

    def test01_resolve(self):
        """Test resolving the PrintNode backend"""
        self.assertIsInstance(self.backend, PrintNodeBackend)

    def test02_fetch_printers(self):
        """Test fetching printers"""
        self.respond(text=json.dumps(PRINTERS))
        printers = self.backend.fetch_printers(self.provider_printnode)
        self.assertEqual([(x.id, x.name, x.is_default) for x in printers], [
            ('71', "Zebra", True),
            ('72', "Dymo", False),
            ('73', "Unnamed printer", False),
        ])
        request = self.sent_request()
        self.assertEqual(request.method, 'GET')
        self.assertEqual(request.url, 'https://api.example.com/printers')
        self.assertEqual(request.headers['Authorization'], 'Basic YWJjOg==')
        self.assertEqual(request.headers['Accept'], 'application/json')
        self.assertEqual(self.session.send.call_args[1]['timeout'], (10, 20))

    def test03_parse_printers(self):
        """Test parsing printer lists"""
        self.assertEqual(parse_printers('[]'), [])
        printers = parse_printers(json.dumps([
            {'id': 'abc', 'name': "Laser", 'is_default': True},
        ]))
        self.assertEqual(printers[0], ('abc', "Laser", True))

    def test04_update_printers(self):
        """Test refreshing printers from PrintNode"""
        self.respond(text=json.dumps(PRINTERS))
        result = self.provider_printnode.update_printers()
        self.assertNotification(
            result, 'success',
            "Printers updated. Created=2, Updated=1, Inactivated=0",
        )
        self.assertEqual(self.printer_zebra.name, "Zebra")
        self.assertTrue(self.printer_zebra.is_default)

    def test05_missing_param(self):
        """Test fetching printers without an API key"""
        self.param('APIKey').unlink()
        with self.assertRaisesRegex(PrintProviderError, "apikey not found"):
            self.backend.fetch_printers(self.provider_printnode)
        self.session.send.assert_not_called()

    def test06_blank_param(self):
        """Test fetching printers with a blank printers URL"""
        self.param('PrintersURL').content = '  '
        with self.assertRaisesRegex(PrintProviderError, "has no content"):
            self.backend.fetch_printers(self.provider_printnode)

    def test07_http_error(self):
        """Test fetching printers when PrintNode rejects the request"""
        self.respond(401, 'x' * 600)
        with self.assertRaises(PrintProviderError) as ctx:
            self.backend.fetch_printers(self.provider_printnode)
        message = str(ctx.exception)
        self.assertTrue(message.startswith("Error fetching printers (HTTP 401)"))
        self.assertTrue(message.endswith('x' * 500 + '...'))

    def test08_connection_error(self):
        """Test fetching printers when PrintNode is unreachable"""
        self.session.send.side_effect = requests.ConnectionError("refused")
        with self.assertRaisesRegex(PrintProviderError, "refused"):
            self.backend.fetch_printers(self.provider_printnode)

    def test09_timeout(self):
        """Test fetching printers when PrintNode times out"""
        self.session.send.side_effect = requests.ReadTimeout("slow")
        with self.assertRaisesRegex(PrintProviderError, "interrupted"):
            self.backend.fetch_printers(self.provider_printnode)

    def test10_invalid_json(self):
        """Test fetching printers when PrintNode returns garbage"""
        self.respond(text='<html>')
        with self.assertRaises(PrintProviderError):
            self.backend.fetch_printers(self.provider_printnode)

    def test11_send(self):
        """Test sending a PDF print job"""
        self.respond(201, '4242')
        job_id = self.backend.send_to_printer(self.provider_printnode,
                                              self.printer_zebra, 3,
                                              str(self.label))
        self.assertEqual(job_id, '4242')
        request = self.sent_request()
        self.assertEqual(request.method, 'POST')
        self.assertEqual(request.url, 'https://api.example.com/printjobs')
        self.assertEqual(request.headers['Authorization'], 'Basic YWJjOg==')
        self.assertEqual(request.headers['Content-Type'], 'application/json')
        body = json.loads(request.data)
        self.assertEqual(body['printerId'], 71)
        self.assertEqual(body['contentType'], 'pdf_base64')
        self.assertEqual(base64.b64decode(body['content']), b'%PDF-1.4 label')
        self.assertEqual(body['source'], "Odoo")
        self.assertEqual(body['options'], {'copies': 3})
        self.assertTrue(body['title'].startswith("Odoo label "))

    def test12_send_raw(self):
        """Test sending a raw CPCL print job"""
        label = self.web_root / 'label.cpcl'
        label.write_bytes(b'<label/>')
        self.respond(text='{"id": 17}')
        job_id = self.backend.send_to_printer(self.provider_printnode,
                                              self.printer_zebra, 1,
                                              str(label))
        self.assertEqual(job_id, '17')
        body = json.loads(self.sent_request().data)
        self.assertEqual(body['contentType'], 'raw_base64')

    def test13_send_http_error(self):
        """Test sending a print job rejected by PrintNode"""
        self.respond(400, 'bad printer')
        with self.assertRaisesRegex(PrintProviderError,
                                    r"Error sending print job \(HTTP 400\): "
                                    r"bad printer"):
            self.backend.send_to_printer(self.provider_printnode,
                                         self.printer_zebra, 1,
                                         str(self.label))

    def test14_send_invalid_printer(self):
        """Test sending a print job to a non-numeric printer"""
        self.printer_zebra.external_id = 'zebra'
        with self.assertRaisesRegex(PrintProviderError, "zebra"):
            self.backend.send_to_printer(self.provider_printnode,
                                         self.printer_zebra, 1,
                                         str(self.label))
        self.session.send.assert_not_called()

    def test15_send_missing_file(self):
        """Test sending a missing label file"""
        with self.assertRaisesRegex(PrintProviderError, "not found"):
            self.backend.send_to_printer(self.provider_printnode,
                                         self.printer_zebra, 1,
                                         str(self.web_root / 'missing.pdf'))
        with self.assertRaisesRegex(PrintProviderError, "Printer not found"):
            self.backend.send_to_printer(self.provider_printnode,
                                         self.env['print.printer'], 1,
                                         str(self.label))

    @mute_logger('odoo.addons.print_provider.backends.transport')
    def test16_job_id(self):
        """Test extracting print job IDs from responses"""
        extract = transport.extract_job_id
        self.assertEqual(extract(' 123\n'), '123')
        self.assertEqual(extract('{"jobId": 5}'), '5')
        self.assertEqual(extract('{"printJobId": "p6"}'), 'p6')
        self.assertEqual(extract('{"id": 7, "jobId": 8}'), '7')
        self.assertEqual(extract('{"state": "queued"}'), '{"state": "queued"}')
        self.assertEqual(extract('[1, 2]'), '[1, 2]')
        self.assertEqual(extract('queued'), 'queued')
        self.assertEqual(extract('y' * 300), 'y' * 200 + '...')
        self.assertEqual(extract(''), '-')
        self.assertEqual(extract(None), '-')

    def test17_basic_auth(self):
        """Test basic authentication credentials"""
        self.assertEqual(transport.basic_auth('abc'), 'YWJjOg==')
        self.assertEqual(transport.truncate('abc', 3), 'abc')
        self.assertEqual(transport.truncate('abcd', 3), 'abc...')
        self.assertIsNone(transport.truncate(None, 3))

    def test18_send_as_user(self):
        """Test sending a print job as an ordinary user"""
        user = new_test_user(self.env, login='label_clerk',
                             groups='base.group_user')
        self.respond(text='{"id": 99}')
        job_id = self.backend.send_to_printer(
            self.provider_printnode.with_user(user),
            self.printer_zebra.with_user(user), 1, str(self.label),
        )
        self.assertEqual(job_id, '99')
        request = self.sent_request()
        self.assertEqual(request.url, 'https://api.example.com/printjobs')
        self.assertEqual(request.headers['Authorization'], 'Basic YWJjOg==')
