"""Print action helpers"""

import logging
import os
from odoo.exceptions import UserError
from odoo.tools.translate import _

_logger = logging.getLogger(__name__)

SUCCESS = 'success'
WARNING = 'warning'
DANGER = 'danger'


def _missing(key):
    return UserError(_("Missing parameter: %s") % key)


def require_param(params, key):
    """Get non-blank parameter value"""
    value = params.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise _missing(key)
    return value


def require_list(params, key):
    """Get non-empty list parameter value"""
    value = params.get(key)
    if not value or not isinstance(value, (list, tuple)):
        raise _missing(key)
    return list(value)


def require_positive_int(params, key):
    """Get positive integer parameter value"""
    if key not in params:
        raise _missing(key)
    try:
        value = int(params[key])
    except (TypeError, ValueError):
        value = -1
    if value <= 0:
        raise UserError(_("Invalid number of copies: %s") % params[key])
    return value


def notification(message, kind=SUCCESS, title=None, sticky=False):
    """Construct client action displaying a notification"""
    return {
        'type': 'ir.actions.client',
        'tag': 'display_notification',
        'params': {
            'title': title or _("Printing"),
            'message': message,
            'type': kind,
            'sticky': sticky,
        },
    }


def safe_delete(path, record_id):
    """Delete temporary label file"""
    if not path:
        return
    try:
        os.unlink(path)
    except FileNotFoundError:
        _logger.debug("Temporary label file for record %s was not present: %s",
                      record_id, path)
    except OSError as exc:
        _logger.warning("Could not delete temporary label file for record "
                        "%s (%s): %s", record_id, path, exc)
