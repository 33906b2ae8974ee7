"""Classifiers for the tinta scanner.

Classifiers are mixins with pure decision logic; they never move the
scanner position.
"""

from tinta.scanner.classifiers.opener import OpenerClassifierMixin

__all__ = ["OpenerClassifierMixin"]
