"""
Command-line entry point.

    domain-check [CATEGORY ...] [--domains-file PATH] [--config PATH]
                 [--debug] [--strict] [--csv NAME]

Exit codes:
    0  run finished (problematic domains are reported, not failed on)
    1  the domain list could not be built
    2  --strict and at least one domain is not VALID
"""

import argparse
import asyncio
import logging
import sys
import aiohttp
from .classifier import DomainClassifier
from .dns_check import DnsChecker
from .domains import DomainSourceError, deduplicate_root_domains, extract_domains, load_domains_file
from .http_probe import HttpProber
from .report import problematic, progress_line, render_summary, results_frame, save_df
from .results import DomainResult
from .settings import CheckConfig, load_check_config, resolve_path

logger = logging.getLogger("domain_checker")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="domain-check",
        description="Check that annotated site domains resolve and serve real content.",
    )
    parser.add_argument("categories", nargs="*", help="Only check these site categories")
    parser.add_argument("--domains-file", help="Read domains from a text file instead of the sites directory")
    parser.add_argument("--config", help="Path to a domain_check.yaml")
    parser.add_argument("--debug", action="store_true", help="Log every classification step")
    parser.add_argument("--strict", action="store_true", help="Exit with code 2 if any domain is not VALID")
    parser.add_argument("--csv", metavar="NAME", help="Also write results to <results_dir>/NAME.csv")
    return parser


def configure_logging(debug: bool) -> None:
    """--debug only affects our own loggers, not aiohttp/asyncio/dnspython."""
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


def collect_domains(config: CheckConfig, categories: list[str], domains_file: str | None) -> list[str]:
    if domains_file:
        domains = load_domains_file(domains_file)
    else:
        domains = extract_domains(resolve_path(config.sites_dir), categories or None)
    return deduplicate_root_domains(domains)


async def check_all(domains: list[str], config: CheckConfig) -> list[DomainResult]:
    """Classify each domain in turn, printing one line per domain."""
    results = []
    async with aiohttp.ClientSession() as session:
        classifier = DomainClassifier(DnsChecker(config), HttpProber(session, config), config)
        for domain in domains:
            logger.debug("Checking domain: %s", domain)
            result = await classifier.classify(domain)
            results.append(result)
            print(progress_line(result), flush=True)
    return results


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_check_config(args.config)

    configure_logging(args.debug or config.debug)

    if args.domains_file:
        print(f"Reading domains from {args.domains_file}...")
    else:
        print(f"Extracting domains from {config.sites_dir} directory...")
    print(f"Categories: {', '.join(args.categories) if args.categories else 'all'}")

    try:
        domains = collect_domains(config, args.categories, args.domains_file)
    except DomainSourceError as e:
        logger.error("Error: %s", e)
        return 1

    print(f"Found {len(domains)} unique root domains\n")
    if not domains:
        print("No domains found.")
        return 0

    results = asyncio.run(check_all(domains, config))

    for line in render_summary(results):
        print(line)

    if args.csv:
        save_df(results_frame(results), resolve_path(config.results_dir), args.csv)

    if args.strict and problematic(results):
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
