import json
import logging

from functools import partial

from tqdm import tqdm
from numpy.random import default_rng

from fixed_map import FixedMap
from fixed_map.utils.logger import setup_logging
from fixed_map.utils.workload import sample_requests, replay

logger = logging.getLogger(__name__)


def main(args):
    setup_logging(args.log_level)
    rng = default_rng(args.seed)

    # Sample the workload
    requests = sample_requests(
        args.num_requests,
        args.num_keys,
        distribution=args.distribution,
        exponent=args.exponent,
        remove_prob=args.remove_prob,
        rng=rng
    )

    # Create the map & replay the requests
    fixed_map = FixedMap(args.capacity)
    logger.info('Replaying %d requests on %r', args.num_requests, fixed_map)
    results = replay(
        fixed_map,
        requests,
        progress=partial(tqdm, desc='Replaying', disable=args.no_progress)
    )

    print(json.dumps(results, indent=2))

    # Save arguments & results
    if args.output_folder is not None:
        args.output_folder.mkdir(parents=True, exist_ok=True)
        with open(args.output_folder / 'arguments.json', 'w') as f:
            json.dump(vars(args), f, default=str)
        with open(args.output_folder / 'results.json', 'w') as f:
            json.dump(results, f)

    return results


def get_parser():
    from argparse import ArgumentParser
    from pathlib import Path

    parser = ArgumentParser(description='Replay a random workload on a FixedMap.')

    # Map
    fixed_map = parser.add_argument_group('Map')
    fixed_map.add_argument('--capacity', type=int, default=1024,
        help='Maximum number of entries in the map (default: %(default)s)')

    # Workload
    workload = parser.add_argument_group('Workload')
    workload.add_argument('--num_keys', type=int, default=10_000,
        help='Number of distinct keys (default: %(default)s)')
    workload.add_argument('--num_requests', type=int, default=100_000,
        help='Number of requests (default: %(default)s)')
    workload.add_argument('--distribution', type=str, default='zipf',
        choices=['uniform', 'zipf'],
        help='Distribution over keys (default: %(default)s)')
    workload.add_argument('--exponent', type=float, default=1.1,
        help='Exponent of the Zipf distribution (default: %(default)s)')
    workload.add_argument('--remove_prob', type=float, default=0.,
        help='Probability of a request being a removal (default: %(default)s)')

    # Miscellaneous
    misc = parser.add_argument_group('Miscellaneous')
    misc.add_argument('--seed', type=int, default=0,
        help='Random seed (default: %(default)s)')
    misc.add_argument('--log_level', type=str, default='INFO',
        help='Logging level (default: %(default)s)')
    misc.add_argument('--no_progress', action='store_true',
        help='Disable the progress bar')
    misc.add_argument('--output_folder', type=Path, default=None,
        help='Output folder for the arguments and results (default: %(default)s)')

    return parser


if __name__ == '__main__':
    parser = get_parser()
    args = parser.parse_args()

    main(args)
