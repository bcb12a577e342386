"""Encoders turning SDK calls into KISSmetricsAPI query strings."""
