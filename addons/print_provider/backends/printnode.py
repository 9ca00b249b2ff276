"""PrintNode cloud printing"""

import base64
import json
import logging
import os
import time
from odoo.exceptions import UserError
from odoo.tools.translate import _
from ..exceptions import PrintProviderError
from . import transport
from .base import PrintBackend, RemotePrinter, render_label
from .registry import register_backend

_logger = logging.getLogger(__name__)

PRINTERS_URL = 'printersurl'
PRINTJOB_URL = 'printjoburl'
API_KEY = 'apikey'

SOURCE = "Odoo"


def parse_printers(body):
    """Parse PrintNode printer list"""
    printers = []
    for printer in json.loads(body):
        printers.append(RemotePrinter(
            id=str(printer.get('id')),
            name=printer.get('name') or _("Unnamed printer"),
            is_default=bool(printer.get('default',
                                        printer.get('is_default', False))),
        ))
    return printers


def parse_printer_id(external_id):
    """Parse PrintNode printer ID"""
    try:
        return int(external_id)
    except (TypeError, ValueError) as exc:
        raise PrintProviderError(
            _("Invalid PrintNode printer ID: %s") % external_id
        ) from exc


def print_job_body(printer_id, copies, path):
    """Construct PrintNode print job request body"""
    with open(path, 'rb') as f:
        content = base64.b64encode(f.read()).decode('ascii')
    raw = os.path.splitext(path)[1].lower() == '.cpcl'
    return {
        'printerId': printer_id,
        'title': _("Odoo label %s") % int(time.time() * 1000),
        'contentType': 'raw_base64' if raw else 'pdf_base64',
        'content': content,
        'source': SOURCE,
        'options': {'copies': copies},
    }


@register_backend('printnode')
class PrintNodeBackend(PrintBackend):
    """PrintNode (https://www.printnode.com) cloud print service"""

    def fetch_printers(self, provider):
        try:
            url = provider._get_param_content(PRINTERS_URL)
            api_key = provider._get_param_content(API_KEY)
            session = transport.new_session()
            request = transport.json_get(url, transport.basic_auth(api_key))
            resp = transport.send(session, request)
            if not 200 <= resp.status_code < 300:
                raise PrintProviderError(
                    _("Error fetching printers (HTTP %s): %s") %
                    (resp.status_code, transport.truncate(resp.text, 500))
                )
            return parse_printers(resp.text)
        except PrintProviderError:
            raise
        except (UserError, ValueError, TypeError, AttributeError) as exc:
            raise PrintProviderError(str(exc)) from exc

    def generate_label(self, provider, table, record_id, template_line,
                       parameters):
        return render_label(provider, table, record_id, template_line,
                            parameters)

    def send_to_printer(self, provider, printer, copies, path):
        if not printer:
            raise PrintProviderError(_("Printer not found"))
        if not path or not os.path.isfile(path):
            raise PrintProviderError(_("Label file not found"))
        try:
            url = provider._get_param_content(PRINTJOB_URL)
            api_key = provider._get_param_content(API_KEY)
            body = print_job_body(parse_printer_id(printer.external_id),
                                  copies, path)
            session = transport.new_session()
            request = transport.json_post(url, transport.basic_auth(api_key),
                                          body)
            resp = transport.send(session, request)
            if not 200 <= resp.status_code < 300:
                raise PrintProviderError(
                    _("Error sending print job (HTTP %s): %s") %
                    (resp.status_code, transport.truncate(resp.text, 500))
                )
            _logger.info("Sent %s to PrintNode printer %s",
                         path, printer.external_id)
            return transport.extract_job_id(resp.text)
        except PrintProviderError:
            raise
        except (UserError, OSError) as exc:
            raise PrintProviderError(str(exc)) from exc
