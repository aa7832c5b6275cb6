"""Pure domain layer: card model, merge engine and disclosure policy."""
