"""Vagrant box release packaging."""

__version__ = "0.3.0"
