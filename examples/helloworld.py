"""
Basic Hello World Example

Serves a plain text response to every connection, using a bare
blocking socket as the server. Request parsing and routing are left out,
the point is to show how a handler builds a response and how the server
writes it. There is no Content-Length: the body ends when the connection
closes. As the response has headers, the body follows the usual blank line.

Usage:
    python helloworld.py

Test with:
    curl -i http://localhost:8000/
"""

import socket

from crane import Response, ResponseBuilder
from crane.utils.logging import exception, info

HOST: str = "127.0.0.1"
PORT: int = 8000


def hello(count: int) -> Response:
	body = f"Hello, World! #{count}"
	return (
		ResponseBuilder()
		.status(200)
		.header("Content-Type", "text/plain")
		.header("Connection", "close")
		.body(body)
		.build()
	)


def run(host: str = HOST, port: int = PORT) -> None:
	server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
	server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
	server.bind((host, port))
	server.listen(5)
	info("Listening", Host=host, Port=port)
	count: int = 0
	try:
		while True:
			client, address = server.accept()
			with client:
				try:
					client.recv(4096)
					count += 1
					client.sendall(hello(count).encode())
					info("Responded", Peer=str(address), Count=count)
				except OSError as e:
					exception(e, "Could not respond")
	except KeyboardInterrupt:
		info("Server stopping…")
	finally:
		server.close()


if __name__ == "__main__":
	run()

# EOF
