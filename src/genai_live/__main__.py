"""Run the interactive console: ``python -m genai_live``."""

from genai_live.console import main


if __name__ == '__main__':
    raise SystemExit(main())
