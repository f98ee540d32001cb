"""
In-Process Services Example: Use the Registry Without a Server
================================================================

This example drives several capabilities directly through a
ServiceRegistry, with no HTTP server involved. Every provider reports to
one EventEmitter, and the example prints the events it saw at the end.

This is useful for:
    - Scripts that want the cache/queue/workflow APIs in-process
    - Seeing the event stream a server would produce

Usage:
    python examples/in_process_services.py
"""

from __future__ import annotations

import asyncio

from archartifacts import ArtifactsConfig, EventEmitter, ServiceConfig, ServiceRegistry


def slugify(page: dict) -> dict:
    return {**page, "slug": page["title"].lower().replace(" ", "-")}


async def index_page(page: dict) -> dict:
    await asyncio.sleep(0)
    return {**page, "indexed": True}


async def main() -> None:
    """Cache a page, queue it for publishing, and run a publish workflow."""
    config = ArtifactsConfig(
        workflow=ServiceConfig(options={"steps": {"slugify": slugify, "index": index_page}}),
    )
    emitter = EventEmitter()

    async with ServiceRegistry() as registry:
        registry.initialize_all(config, emitter=emitter)

        page = {"title": "Caching Strategy", "body": "Use Redis in production."}
        await registry.caching.put("page:caching", page)
        await registry.queueing.enqueue("page:caching", "publish")

        await registry.workflow.define_workflow("publish", ["slugify", "index"])
        queued_key = await registry.queueing.dequeue("publish")
        published = await registry.workflow.run_workflow(
            "publish", await registry.caching.get(queued_key)
        )

        await registry.notifying.subscribe("published", lambda slug: print(f"published: {slug}"))
        await registry.notifying.notify("published", published["slug"])

        print()
        print("Events (oldest first)")
        print("-" * 40)
        for event in reversed(emitter.recent_events()):
            print(f"{event.emitted_at:%H:%M:%S.%f}  {event.name}")


if __name__ == "__main__":
    asyncio.run(main())
