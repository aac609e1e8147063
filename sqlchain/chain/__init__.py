"""
========================================
Fragment/chain composition engine.
========================================

Modules:
    template: Template value type and input normalization
    fragment: Fragment rendering and the Expression base class
    chain: Chain with keyword methods and single-pass rendering
    keywords: Module-level chain starters (SELECT, EXISTS, ...)
"""

__all__ = [
    'Chain', 'Expression', 'Fragment', 'Template', 'as_template',
    'DELETE_FROM', 'EXISTS', 'INSERT_INTO', 'SELECT', 'UPDATE', 'WITH_RECURSIVE'
]

from .chain import Chain
from .fragment import Expression, Fragment
from .keywords import DELETE_FROM, EXISTS, INSERT_INTO, SELECT, UPDATE, WITH_RECURSIVE
from .template import Template, as_template
