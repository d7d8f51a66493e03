"""
Configurator Services
=====================

External collaborators for the configuration wizard.
"""

from configurator.services.package_api import PackageApiClient

__all__ = ["PackageApiClient"]
