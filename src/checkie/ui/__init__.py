"""Terminal and Qt front-end adapters."""
