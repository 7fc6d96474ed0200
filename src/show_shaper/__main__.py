"""Run the HTTP service: ``python -m show_shaper``."""

from .main import main

main()
