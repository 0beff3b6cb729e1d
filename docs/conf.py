# Sphinx configuration file

import os
import sys
sys.path.insert(0, os.path.abspath('../src'))

project = 'Workflow Definitions'
copyright = '2026, Workflow Definitions contributors'
author = 'Workflow Definitions contributors'
release = '0.1.0'

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx_autodoc_typehints',
]

exclude_patterns = ['_build']

html_theme = 'alabaster'

autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
}

napoleon_google_docstring = True
napoleon_numpy_docstring = False
