"""Install Aikeedo plugins and themes and place their public assets."""

__version__ = "0.1.0"
