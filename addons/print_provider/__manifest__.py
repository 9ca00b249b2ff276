# pylint: disable=missing-docstring,pointless-statement
{
    'name': 'Print Providers',
    'summary': 'Label printing via pluggable print providers',
    'description': """
Print labels via print providers
================================

Generate labels for records and send them to printers made available
by a print provider, such as a cloud printing service or the local
CUPS server.

Key Features
------------
* Pluggable print backends (PrintNode and local lpr included)
* Synchronise printers with the print provider
* Label templates per model, with QWeb PDF and CPCL/XML output
* Hooks allowing other modules to customise label parameters
    """,
    'version': '17.0.1.0.0',
    'author': 'Michael Brown <mbrown@fensystems.co.uk>',
    'category': 'Extra Tools',
    'license': 'LGPL-3',
    'depends': [
        'web'
    ],
    'external_dependencies': {
        'python': ['requests', 'lxml'],
    },
    'data': [
        'security/ir.model.access.csv',
        'data/print_provider_data.xml',
        'views/print_provider_views.xml',
        'views/print_printer_views.xml',
        'views/print_template_views.xml',
        'views/ir_actions_server_views.xml',
        'wizard/print_label_wizard_views.xml',
    ],
}
