"""Local printing via the CUPS command-line tools"""

import logging
import os
import re
import subprocess
from odoo.tools.misc import find_in_path
from odoo.tools.translate import _
from ..exceptions import PrintProviderError
from .base import PrintBackend, RemotePrinter, render_label
from .registry import register_backend

_logger = logging.getLogger(__name__)

DEFAULT_RE = re.compile(r'system default destination:\s*(\S+)')
JOB_RE = re.compile(r'request id is (\S+)')


def _find_exec(name):
    """Find usable executable"""
    try:
        path = find_in_path(name)
    except IOError:
        path = None
    if not path:
        raise PrintProviderError(_("Cannot find %s executable") % name)
    return path


def _run(args, document=None):
    """Run command, returning its output"""
    _logger.info("Running %s", ' '.join(args))
    proc = subprocess.Popen(args, stdin=subprocess.PIPE,
                            stdout=subprocess.PIPE,
                            stderr=subprocess.STDOUT,
                            env=dict(os.environ, LC_ALL='C'))
    output = proc.communicate(document)[0]
    if isinstance(output, bytes):
        output = output.decode('utf-8', 'replace')
    if proc.returncode != 0:
        raise PrintProviderError(
            _("%s failed (error code: %s). Message: %s") %
            (args[0], proc.returncode, output)
        )
    return output or ''


@register_backend('lpr')
class LprBackend(PrintBackend):
    """Print queues of the local CUPS server

    The external ID of each printer is its print queue name.
    """

    def fetch_printers(self, provider):
        lpstat = _find_exec('lpstat')
        queues = _run([lpstat, '-e']).split()
        match = DEFAULT_RE.search(_run([lpstat, '-d']))
        default = match.group(1) if match else None
        return [RemotePrinter(id=queue, name=queue, is_default=queue == default)
                for queue in queues]

    def generate_label(self, provider, table, record_id, template_line,
                       parameters):
        return render_label(provider, table, record_id, template_line,
                            parameters)

    def send_to_printer(self, provider, printer, copies, path):
        lpr = _find_exec('lpr')
        args = [lpr]
        if printer.external_id:
            args += ['-P', printer.external_id]
        args += ['-T', _("Odoo label")]
        if copies > 1:
            args += ['-#', str(copies)]
        try:
            with open(path, 'rb') as f:
                document = f.read()
        except OSError as exc:
            raise PrintProviderError(str(exc)) from exc
        match = JOB_RE.search(_run(args, document))
        return match.group(1) if match else '-'
