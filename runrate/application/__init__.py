"""
Application Layer

Use cases orchestrating the readings source and the domain services, and
the DTOs they hand to the presentation layer.
"""
