"""Error handlers and bindings that survive an asyncio event loop.

This example starts two "requests" from the same session frame. Each request
schedules work on the loop and returns immediately; when the loop later runs
that work, it still sees the request id bound by the request that created it
and its errors still reach the session's handler.

Key concepts:
- frame(code=..., catch=...) captures handlers for callbacks created inside it
- local="demo.request_id" gives each request its own value of the binding
- the trace handed to catch lists every frame from the failure to the root

Run with: uv run python examples/event_loop_demo.py
"""

import asyncio

from cbframe import bindings, frame


def report(trace: str) -> None:
    print("session caught an error:")
    print(trace)


def finish(loop: asyncio.AbstractEventLoop, done: asyncio.Event) -> None:
    request_id = bindings["demo.request_id"]
    print(f"finishing {request_id}")
    if request_id == "req-2":
        loop.call_soon(done.set)
        raise RuntimeError(f"{request_id} failed while finishing")


def request(loop: asyncio.AbstractEventLoop, request_id: str, done: asyncio.Event) -> None:
    bindings["demo.request_id"] = request_id
    print(f"started {request_id}")
    loop.call_later(0.05, frame(name=f"finish {request_id}", code=finish), loop, done)


async def main() -> None:
    loop = asyncio.get_running_loop()
    done = asyncio.Event()

    def session() -> None:
        for request_id in ("req-1", "req-2"):
            start = frame(name=f"request {request_id}", code=request, local="demo.request_id")
            loop.call_soon(start, loop, request_id, done)

    frame(name="session", code=session, catch=report)()

    await done.wait()
    await asyncio.sleep(0)
    print(f"outside any frame: demo.request_id={bindings.get('demo.request_id')!r}")


if __name__ == "__main__":
    asyncio.run(main())
