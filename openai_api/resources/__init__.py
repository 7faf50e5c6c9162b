"""Request and response types plus dispatch, one module per REST resource."""
