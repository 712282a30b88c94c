"""Kernel – error hierarchy and value helpers shared by every layer."""
