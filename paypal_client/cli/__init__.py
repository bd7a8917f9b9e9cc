"""Command-line interface for paypal-client."""
