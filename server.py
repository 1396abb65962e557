#!/usr/bin/env python3

import asyncio
import logging
import os
import signal
import sys

from plaincache.address import AddressError, parse_address
from plaincache.http_server import HTTPCacheServer


def print_usage(prog):
    print("Usage:")
    print(f"{prog} server_address")
    print("\nExample:")
    print(f"{prog} :8080")
    print(f"{prog} 127.0.0.1:8080")
    print(f"{prog} [::1]:http")


async def serve(host, port):
    kv_server = HTTPCacheServer(host=host, port=port)
    await kv_server.start()

    stopped = asyncio.Event()
    if sys.platform != "win32":
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stopped.set)

    try:
        await stopped.wait()
        print("\nShutting down...")
    finally:
        await kv_server.stop()


def main(argv=None):
    argv = sys.argv if argv is None else argv
    prog = os.path.basename(argv[0]) if argv else "plaincache"

    if len(argv) < 2:
        print_usage(prog)
        return 1

    try:
        host, port = parse_address(argv[1])
    except AddressError as e:
        print(f"error resolving address: {e}\n")
        print_usage(prog)
        return 1

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        asyncio.run(serve(host, port))
    except KeyboardInterrupt:
        print("\nShutting down...")
    except Exception as e:
        print(f"error: {e}")
        return 1
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
