import argparse
import asyncio
import json

from scrapejobs.clients import get_actor_client, get_task_client
from scrapejobs.config import settings
from scrapejobs.logging_config import setup_logging
from scrapejobs.models import RunHandle, status_body
from scrapejobs.poller import wait_for_run
from scrapejobs.status import ActorRunStatusResolver, TaskRunStatusResolver


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Poll a task or scrape run until it finishes")
    parser.add_argument("run_id")
    parser.add_argument("--dataset-id", default="", help="poll an actor scrape run instead of a task run")
    parser.add_argument("--interval", type=float, default=5.0)
    parser.add_argument("--timeout", type=float, default=600.0)
    return parser.parse_args()


async def main(args: argparse.Namespace) -> None:
    if args.dataset_id:
        resolver = ActorRunStatusResolver(get_actor_client())
        handle = RunHandle(run_id=args.run_id, dataset_id=args.dataset_id)
        poll = lambda: resolver.poll(handle)  # noqa: E731
    else:
        task_resolver = TaskRunStatusResolver(get_task_client())
        poll = lambda: task_resolver.poll(args.run_id)  # noqa: E731
    status = await wait_for_run(poll, interval_s=args.interval, timeout_s=args.timeout)
    print(json.dumps(status_body(status), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    setup_logging(settings.scrape_log_level, settings.scrape_log_file or None)
    asyncio.run(main(parse_args()))
