"""
cli.py
Inspect a normalization prototype file and rate a feature against it.
Run with python -m normmatch.cli --help for all options.
"""
import sys
import logging
import argparse
from .config import Tunables, NORM_ADJ_MIDPOINT, NORM_ADJ_CURL, norm_proto_path
from .errors import NormMatchError
from .matcher import NormMatcher
from .params import CharNormFeature
from .symbols import NO_CLASS, class_id_of, symbol_of

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'


def setup_logging(level=logging.INFO, log_path=None):
    """Log the NormMatch and NormProtoLoader loggers to the terminal and optionally to log_path (overwritten)."""
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_path:
        handlers.append(logging.FileHandler(log_path, mode='w'))
    for handler in handlers:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    closed = set()
    for name in ("NormMatch", "NormProtoLoader"):
        logger = logging.getLogger(name)
        for old in logger.handlers:
            if id(old) not in closed:
                old.close()
                closed.add(id(old))
        logger.setLevel(level)
        logger.handlers = list(handlers)
    return logging.getLogger("NormMatch")


def build_parser():
    parser = argparse.ArgumentParser(description="NormMatch: rate character normalization features against class prototypes.")
    parser.add_argument('proto_file', nargs='?', default=None, help='Prototype file (default: NormProtoFile under --data-dir)')
    parser.add_argument('--data-dir', type=str, default=None, help='Directory NormProtoFile is resolved against')
    parser.add_argument('--class', dest='class_symbol', type=str, default=None,
                        help='Class symbol to rate against; omit to score as noise')
    parser.add_argument('--feature', type=float, nargs=4, metavar=('Y', 'LENGTH', 'RX', 'RY'), default=None,
                        help='Char-norm feature to rate')
    parser.add_argument('--midpoint', type=float, default=NORM_ADJ_MIDPOINT, help='NormAdjMidpoint')
    parser.add_argument('--curl', type=float, default=NORM_ADJ_CURL, help='NormAdjCurl')
    parser.add_argument('--debug', action='store_true', help='Log every prototype and its match')
    parser.add_argument('--plot', type=str, default=None, help='Save the rating curve to this image file')
    parser.add_argument('--log', type=str, default=None, help='Also write logs to this file')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logger = setup_logging(logging.DEBUG if args.debug else logging.INFO, args.log)
    try:
        tunables = Tunables(args.midpoint, args.curl)
    except NormMatchError as e:
        logger.error(f"[NormMatch] {e}")
        return 1
    matcher = NormMatcher(tunables)
    try:
        if args.proto_file or args.data_dir or args.class_symbol:
            table = matcher.load(args.proto_file or norm_proto_path(args.data_dir))
            for class_id in table.class_ids():
                logger.info(f"[NormMatch] Class {symbol_of(class_id)!r}: {len(table.prototypes_for(class_id))} prototypes")
        if args.feature is not None:
            class_id = class_id_of(args.class_symbol) if args.class_symbol is not None else NO_CLASS
            rating = matcher.compute_match(class_id, CharNormFeature(args.feature), debug=args.debug)
            print(f"{symbol_of(class_id)}\t{rating:.6f}")
        if args.plot:
            import matplotlib.pyplot as plt
            from .rating_curve import plot_rating_curve
            fig = plot_rating_curve(tunables, save_path=args.plot, show=False)
            plt.close(fig)
            logger.info(f"[NormMatch] Saved rating curve to {args.plot}")
    except NormMatchError as e:
        logger.error(f"[NormMatch] {e}")
        return 1
    finally:
        matcher.unload()
    return 0


if __name__ == '__main__':
    sys.exit(main())
