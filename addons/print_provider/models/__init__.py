from . import ir_actions_print
from . import ir_actions_report
from . import print_printer
from . import print_provider
from . import print_template
