#!/usr/bin/env python3
"""
Session-Per-Worker Grid Example

Each worker thread owns one remote session for its whole lifetime and looks it
up from the registry whenever it needs it. Sessions are released when the worker
finishes, on success or failure.

Usage:
    docker run -d -p 4444:4444 --shm-size=2g selenium/standalone-chrome
    python examples/grid_session_per_worker.py http://localhost:4444
"""

import sys
import threading

from parallel_webdriver.browser import Endpoint, RemoteSessionClient, SessionRegistry
from parallel_webdriver.config import DriverConfig

PAGES = ["https://example.com", "https://www.python.org", "https://www.selenium.dev"]


def worker(registry: SessionRegistry, name: str) -> None:
    registry.acquire(name, "chrome")
    try:
        for url in PAGES:
            driver = registry.current(name)
            driver.get(url)
            print(f"[{name}] {driver.title}")
    finally:
        registry.release(name)


def main():
    hub = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:4444"
    config = DriverConfig(headless=True)

    with SessionRegistry(RemoteSessionClient(config), config, Endpoint.parse(hub)) as registry:
        threads = [
            threading.Thread(target=worker, args=(registry, f"worker-{i}"), name=f"worker-{i}")
            for i in range(4)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        print(f"Registry stats: {registry.get_registry_stats()}")


if __name__ == "__main__":
    main()
