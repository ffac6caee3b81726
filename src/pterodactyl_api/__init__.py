"""Pterodactyl API client.

Client library for the Pterodactyl panel's application API. Authenticates
with a bearer token and exposes typed operations for the Users resource.
"""

__version__ = "0.1.0"
