"""AzureRM provider: typed resource IDs and managed Azure resources."""

__version__ = "0.1.0"
