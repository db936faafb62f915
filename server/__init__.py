"""HTTP driver for the Bondtolva engine."""
