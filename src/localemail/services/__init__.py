"""
Stateless helpers used by the Mailer.

This package contains address validation, the simulation gate, filename
template expansion and the filesystem side of a send.
"""

__all__ = ['address', 'simulation', 'storage', 'template']
