"""
Component modules for the installer.

This package contains all the component modules for the installer.
Each component is a separate package that provides installation and
configuration functionality for one provisioning concern.
"""
