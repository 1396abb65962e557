#!/usr/bin/env python3

import asyncio
import sys
from typing import Optional

import aiohttp


class KVStoreShell:
    def __init__(self, base_url: str = None):
        self.base_url = (base_url or "http://localhost:8080").rstrip("/")
        self.session: Optional[aiohttp.ClientSession] = None

    async def connect(self):
        if self.session is None:
            self.session = aiohttp.ClientSession()

    async def close(self):
        if self.session is not None:
            await self.session.close()
            self.session = None

    async def start(self):
        """Start the shell session"""
        await self.connect()

        print("Welcome to the plaincache shell!")
        print(f"Connected to: {self.base_url}")
        self.show_help()
        print("=" * 60)

        try:
            while True:
                try:
                    command = input("plaincache> ").strip()

                    if not command:
                        continue

                    if command.lower() in ['quit', 'exit', 'q']:
                        break

                    await self.execute_command(command)

                except KeyboardInterrupt:
                    print("\nGoodbye!")
                    break
                except EOFError:
                    break
        finally:
            await self.close()

    async def execute_command(self, command: str):
        parts = command.split(maxsplit=2)
        if not parts:
            return

        cmd = parts[0].lower()

        if cmd == 'get' and len(parts) == 2:
            await self.get(parts[1])
        elif cmd == 'post' and len(parts) >= 2:
            value = parts[2] if len(parts) > 2 else ""
            await self.post(parts[1], value)
        elif cmd == 'delete' and len(parts) == 2:
            await self.delete(parts[1])
        elif cmd == 'help':
            self.show_help()
        else:
            print("Invalid command. Type 'help' for available commands.")

    def _url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return self.base_url + path

    async def _request(self, method: str, path: str, data: bytes = None):
        try:
            async with self.session.request(method, self._url(path), data=data) as resp:
                body = await resp.read()
        except (aiohttp.ClientError, OSError) as e:
            print(f"Network error: {e}")
            return

        print(f"{method} {resp.status} {resp.reason}")
        if body:
            print(body.decode("utf-8", errors="replace"))

    async def get(self, path: str):
        await self._request("GET", path)

    async def post(self, path: str, value: str):
        await self._request("POST", path, value.encode("utf-8"))

    async def delete(self, path: str):
        await self._request("DELETE", path)

    def show_help(self):
        print("\nCommands:")
        print("  get <path>              - Fetch the value stored at path")
        print("  post <path> <value>     - Store value at path")
        print("  delete <path>           - Delete the value at path")
        print("  help                    - Show this help")
        print("  quit                    - Exit the shell")


async def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else None

    shell = KVStoreShell(base_url)
    await shell.start()


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nGoodbye!")


if __name__ == "__main__":
    run()
