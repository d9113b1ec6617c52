from gcsecretmanager.clients.secretmanager import SecretManagerClient

__all__ = ["SecretManagerClient"]
