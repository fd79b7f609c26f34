"""Import profile loading and configuration validation."""
