"""Services layer: tagged-result wrappers over the record API."""
