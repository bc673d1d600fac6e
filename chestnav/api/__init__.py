"""chestnav API package - command-line interface."""
