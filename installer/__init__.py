"""
Paperless-ngx installer.

This package provides the component framework (base component, registry,
orchestrator), the settings models and the provisioning components that
install and configure Paperless-ngx on a Debian-family host.
"""
