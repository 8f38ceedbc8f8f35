"""Export rendering adapters."""
