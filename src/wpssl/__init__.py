"""wpssl: WordPress + Docker + Let's Encrypt provisioning CLI."""

__version__ = "0.1.0"
