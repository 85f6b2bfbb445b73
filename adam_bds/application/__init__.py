"""Application layer: the build use case and its request/response models."""
