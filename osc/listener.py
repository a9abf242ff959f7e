import socket
import threading
from dataclasses import dataclass
from typing import Optional

from osc import codec
from osc.mapping import ERROR_BACKOFF, JOIN_TIMEOUT, POLL_INTERVAL, RECV_BUFFER_SIZE
from state.schema import OscConfig
from state.store import ParameterStore


@dataclass
class _ListenerRuntime:
    sock: socket.socket
    stop_event: threading.Event
    thread: threading.Thread


class OSCListener:
    """
    Receives avatar parameter updates on a UDP socket and mirrors them
    into a ParameterStore.

    Stopped → Running → Stopped. `start()` while running and `stop()` while
    stopped are no-ops. The socket is non-blocking and polled by one daemon
    thread, so `stop()` returns within roughly one poll interval.
    """

    def __init__(self, store: ParameterStore):
        self.store = store
        self._runtime: Optional[_ListenerRuntime] = None
        self._lifecycle_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._runtime is not None

    @property
    def address(self) -> Optional[tuple[str, int]]:
        """Actual bound (host, port), or None when stopped."""
        runtime = self._runtime
        if runtime is None:
            return None
        host, port = runtime.sock.getsockname()[:2]
        return host, port

    def start(self, config: OscConfig) -> None:
        """Bind and start polling. Bind errors propagate to the caller."""
        with self._lifecycle_lock:
            if self._runtime is not None:
                return

            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            try:
                sock.bind((config.listen_host, config.listen_port))
                sock.setblocking(False)
            except OSError:
                sock.close()
                raise

            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._poll,
                args=(sock, stop_event),
                name="osc-listener",
                daemon=True,
            )
            self._runtime = _ListenerRuntime(sock, stop_event, thread)
            thread.start()
            host, port = sock.getsockname()[:2]

        print(f"[OSCListener] Listening on {host}:{port}")

    def stop(self) -> None:
        with self._lifecycle_lock:
            runtime = self._runtime
            if runtime is None:
                return
            self._runtime = None

            runtime.stop_event.set()
            runtime.thread.join(timeout=JOIN_TIMEOUT)
            if runtime.thread.is_alive():
                print("[OSCListener] Warning: listener thread did not exit cleanly")
            runtime.sock.close()

        print("[OSCListener] Stopped.")

    def restart(self, config: OscConfig) -> None:
        self.stop()
        self.start(config)

    def _poll(self, sock: socket.socket, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            try:
                dgram = sock.recv(RECV_BUFFER_SIZE)
            except BlockingIOError:
                stop_event.wait(POLL_INTERVAL)
                continue
            except OSError as e:
                if stop_event.is_set():
                    break
                print(f"[OSCListener] Error receiving OSC: {e}")
                stop_event.wait(ERROR_BACKOFF)
                continue

            try:
                updated = codec.decode(dgram)
            except Exception as e:
                print(f"[OSCListener] Warning: dropped undecodable packet: {e}")
                continue

            if updated:
                self.store.upsert_all(updated)
