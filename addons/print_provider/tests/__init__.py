from . import test_backend_resolver
from . import test_hooks
from . import test_label_report
from . import test_lpr
from . import test_print_labels
from . import test_print_template
from . import test_printnode
from . import test_update_printers
