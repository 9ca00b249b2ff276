from .base import PrintBackend, RemotePrinter, render_label
from .registry import (backend_keys, register_backend, resolve_backend,
                       unregister_backend)
from . import lpr, printnode
