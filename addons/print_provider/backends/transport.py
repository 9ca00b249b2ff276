"""HTTP transport for cloud print backends"""

import base64
import json
import logging
import requests
from odoo.tools.translate import _
from ..exceptions import PrintProviderError

_logger = logging.getLogger(__name__)

MIME_JSON = 'application/json'

CONNECT_TIMEOUT = 10
REQUEST_TIMEOUT = 20


def basic_auth(api_key):
    """Construct basic authentication credentials for an API key"""
    raw = '%s:' % api_key
    return base64.b64encode(raw.encode('utf-8')).decode('ascii')


def new_session():
    """Construct HTTP client session"""
    session = requests.Session()
    session.headers['Accept'] = MIME_JSON
    return session


def json_get(url, credentials):
    """Build JSON GET request"""
    return requests.Request('GET', url, headers={
        'Authorization': 'Basic %s' % credentials,
        'Accept': MIME_JSON,
    })


def json_post(url, credentials, body):
    """Build JSON POST request"""
    return requests.Request('POST', url, data=json.dumps(body), headers={
        'Authorization': 'Basic %s' % credentials,
        'Accept': MIME_JSON,
        'Content-Type': MIME_JSON,
    })


def send(session, request, timeout=REQUEST_TIMEOUT):
    """Send request, mapping transport failures to :exc:`PrintProviderError`"""
    prepared = session.prepare_request(request)
    try:
        return session.send(prepared, timeout=(CONNECT_TIMEOUT, timeout))
    except requests.Timeout as exc:
        raise PrintProviderError(
            _("Print provider request interrupted: %s") % exc
        ) from exc
    except requests.RequestException as exc:
        raise PrintProviderError(str(exc)) from exc


def truncate(text, length):
    """Truncate text to a maximum length"""
    if text is None:
        return None
    return text if len(text) <= length else text[:length] + '...'


def extract_job_id(body, length=200):
    """Extract print job ID from a response body

    Falls back to a preview of the body if no job ID can be found.
    """
    raw = (body or '').strip()
    if raw.isdigit():
        return raw
    try:
        job = json.loads(raw)
    except ValueError:
        _logger.warning("Unexpected non-JSON response from print provider: %s",
                        truncate(raw, max(length, 300)))
        return truncate(raw, length) or '-'
    if isinstance(job, dict):
        for key in ('id', 'jobId', 'printJobId'):
            if key in job:
                return str(job[key])
    return truncate(raw, length) or '-'
