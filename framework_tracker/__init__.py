"""Framework discussion and issue tracker."""

__version__ = "0.1.0"
