"""Per-entity behaviour states and the controller that advances them."""
