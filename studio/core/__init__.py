"""Configuration, rendering and generative AI clients."""
