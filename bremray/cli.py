"""CLI for the Bremray client: health checks, listings, job totals and invoicing."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from bremray.context import AppContext, app_context


def _print_error(ctx_store) -> bool:
    if ctx_store.state.error:
        print(f"Error: {ctx_store.state.error}")
        return True
    return False


async def cmd_health(ctx: AppContext, args) -> int:
    status = await ctx.health.check_all()
    for service, state in status.as_dict().items():
        print(f"{service:<12} {state}")
    return 0 if all(s == "connected" for s in status.as_dict().values()) else 1


async def cmd_list(ctx: AppContext, args) -> int:
    if args.resource == "items":
        await ctx.items.load()
        if _print_error(ctx.items):
            return 1
        for item in ctx.items.data:
            print(f"{item.id}  {item.name:<40} {item.unit.value:<5} {item.unit_price:>10}")
    elif args.resource == "customers":
        await ctx.customers.load()
        if _print_error(ctx.customers):
            return 1
        for c in ctx.customers.data:
            print(f"{c.id}  {c.name:<30} {c.email or '':<30} {c.phone or ''}")
    elif args.resource == "templates":
        await ctx.templates.load(active_only=args.active)
        if _print_error(ctx.templates):
            return 1
        for t in ctx.templates.data:
            flag = "" if t.is_active else " (inactive)"
            print(f"{t.id}  {t.name}{flag}: {len(t.items)} items, {len(t.phases)} phases")
    else:
        if args.status:
            await ctx.jobs.load_by_status(args.status)
        elif args.customer:
            await ctx.jobs.load_by_customer(args.customer)
        else:
            await ctx.jobs.load()
        if _print_error(ctx.jobs):
            return 1
        for j in ctx.jobs.data:
            total = ctx.jobs.calculate_job_total(j)
            print(f"{j.id}  {j.status.value:<12} {j.address:<40} {total:>10}")
    return 0


async def cmd_job_total(ctx: AppContext, args) -> int:
    job = await ctx.jobs.get_by_id(args.job_id)
    if job is None:
        _print_error(ctx.jobs)
        return 1
    print(ctx.jobs.calculate_job_total(job))
    return 0


async def cmd_send_to_wave(ctx: AppContext, args) -> int:
    from bremray.api.client import ApiError

    try:
        result = await ctx.jobs.send_to_invoicing(args.job_id)
    except ApiError as e:
        print(f"Failed to send to Wave: {e.message}")
        return 1
    print(f"Invoice {result.get('invoiceNumber', '?')}: {result.get('invoiceUrl', '')}")
    if result.get("message"):
        print(result["message"])
    return 0


_COMMANDS = {
    "health": cmd_health,
    "list": cmd_list,
    "job-total": cmd_job_total,
    "send-to-wave": cmd_send_to_wave,
}


async def _run(args) -> int:
    async with app_context() as ctx:
        return await _COMMANDS[args.command](ctx, args)


def main():
    parser = argparse.ArgumentParser(description="Bremray Electrical job client")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # health
    subparsers.add_parser("health", help="Check the Wave and Cloudflare integrations")

    # list
    ls = subparsers.add_parser("list", help="List a resource")
    ls.add_argument("resource", choices=["items", "customers", "jobs", "templates"])
    ls.add_argument("--status", default=None, help="Jobs: filter by status")
    ls.add_argument("--customer", default=None, help="Jobs: filter by customer id")
    ls.add_argument("--active", action="store_true", help="Templates: active only")

    # job-total
    jt = subparsers.add_parser("job-total", help="Print a job's total")
    jt.add_argument("job_id")

    # send-to-wave
    sw = subparsers.add_parser("send-to-wave", help="Create a Wave invoice for a job")
    sw.add_argument("job_id")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
