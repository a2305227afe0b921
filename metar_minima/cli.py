#!/usr/bin/env python3

"""Command-line front end: decode METARs and check them against personal minima."""

import sys
import argparse
import logging
from typing import List, Optional

from metar_minima import config
from metar_minima.briefing import build_briefing
from metar_minima.exceptions import MetarMinimaError
from metar_minima.models import Minima
from metar_minima.render import render
from metar_minima.sources import NoaaMetarSource

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='metar-minima',
        description='Decode METARs, check personal minima and summarize trends.',
    )
    parser.add_argument('-m', '--metar', action='append', default=[], metavar='RAW',
                        help='Raw METAR text (repeatable, oldest first)')
    parser.add_argument('--icao', action='append', default=[],
                        help='Fetch the latest METAR for a station (repeatable)')
    parser.add_argument('--icao-history', type=int, default=0, metavar='N',
                        help='Fetch the last N METARs per station instead of the latest one')
    parser.add_argument('-t', '--taf', help='Raw TAF text, shown unparsed')
    parser.add_argument('--runway', type=int, default=0, metavar='DEG',
                        help='Runway magnetic heading for wind components')
    parser.add_argument('--min-ceiling', type=float, default=config.MIN_CEILING_FT, metavar='FT',
                        help='Minimum ceiling in feet (default: %(default)s)')
    parser.add_argument('--min-vis', type=float, default=config.MIN_VISIBILITY_SM, metavar='SM',
                        help='Minimum visibility in statute miles (default: %(default)s)')
    parser.add_argument('--max-xwind', type=float, default=config.MAX_CROSSWIND_KT, metavar='KT',
                        help='Maximum crosswind in knots (default: %(default)s)')
    parser.add_argument('--format', choices=['text', 'json'], default='text', type=str.lower,
                        help='Output format')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')
    return parser


def collect_reports(args: argparse.Namespace, source: NoaaMetarSource) -> List[str]:
    """Raw reports from --metar first, then fetched ones in station order."""
    raws = list(args.metar)
    for icao in args.icao:
        if args.icao_history > 0:
            fetched = source.fetch_history(icao, args.icao_history)
            if fetched:
                raws.extend(fetched)
            else:
                logger.error("Failed to fetch historical METARs for %s", icao)
        else:
            latest = source.fetch_latest(icao)
            if latest:
                raws.append(latest)
            else:
                logger.error("Failed to fetch METAR for %s", icao)
    return raws


def main(argv: Optional[List[str]] = None, source: Optional[NoaaMetarSource] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.metar and not args.icao:
        parser.print_usage(sys.stderr)
        return 1

    try:
        minima = Minima(
            min_ceiling_ft=args.min_ceiling,
            min_visibility_sm=args.min_vis,
            max_crosswind_kt=args.max_xwind,
        )
    except MetarMinimaError as e:
        parser.error(str(e))

    raws = collect_reports(args, source or NoaaMetarSource())
    if not raws:
        print("No METARs provided or fetched.", file=sys.stderr)
        return 1

    try:
        briefing = build_briefing(raws, runway_heading=args.runway, minima=minima, taf_raw=args.taf)
    except MetarMinimaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(render(briefing, args.format))
    if args.format == 'json':
        sys.stdout.write("\n")
    return 0


if __name__ == '__main__':
    sys.exit(main())
