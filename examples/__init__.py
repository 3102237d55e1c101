"""Example applications built on the signing service."""
