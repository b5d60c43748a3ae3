#!/usr/bin/env python3
"""Run the exercise tracker web server."""
import logging

from exercise_tracker.config import get_server_config


def main():
    import uvicorn

    config = get_server_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    print(f"""
    ╔═══════════════════════════════════════════════════════╗
    ║           Exercise Tracker Server                     ║
    ╠═══════════════════════════════════════════════════════╣
    ║  URL: http://{config.host}:{config.port:<5}                            ║
    ║  API Docs: http://{config.host}:{config.port:<5}/docs                  ║
    ║  Database: {str(config.db_path):<20}                       ║
    ╚═══════════════════════════════════════════════════════╝
    """)

    uvicorn.run(
        "server.app:app",
        host=config.host,
        port=config.port,
        reload=config.reload,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
