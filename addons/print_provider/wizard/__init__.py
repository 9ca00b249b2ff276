from . import print_label_wizard
