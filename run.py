"""Project root entry point for launching the HTTP API."""

from __future__ import annotations


def main():
    from translate_dir.config import load_config
    from translate_dir.web import create_app

    config = load_config()
    server = config.get("server", {})
    app = create_app(config)
    app.run(host=server.get("host", "127.0.0.1"), port=int(server.get("port", 5500)))


if __name__ == "__main__":
    main()
