"""Entry point: ``python -m todo_app`` or ``todo-app``."""

import asyncio

from todo_app.cli.app import TodoCLIApp


def main() -> None:
    app = TodoCLIApp()
    asyncio.run(app.run())


if __name__ == "__main__":
    main()
