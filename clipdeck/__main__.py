"""Run ClipDeck with ``python -m clipdeck``"""

from .app import main

main()
