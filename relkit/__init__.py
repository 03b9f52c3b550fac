"""Interactive, gated package release procedure."""
