"""partfit - vehicle fitment resolution for a parts storefront."""

__version__ = "0.1.0"
