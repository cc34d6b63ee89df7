"""Ad Variants Studio backend."""
