import numpy as np
import logging

from collections import namedtuple
from numpy.random import default_rng

logger = logging.getLogger(__name__)

Requests = namedtuple('Requests', ['keys', 'ops'])

OP_ACCESS, OP_REMOVE = 0, 1


def key_probabilities(num_keys, distribution='zipf', exponent=1.1):
    """Probability of requesting each key in `range(num_keys)`."""
    if distribution == 'uniform':
        return np.full((num_keys,), 1. / num_keys)
    elif distribution == 'zipf':
        weights = 1. / np.arange(1, num_keys + 1) ** exponent
        return weights / np.sum(weights)
    else:
        raise ValueError(f'Unknown distribution: {distribution}')


def sample_requests(
        num_requests,
        num_keys,
        distribution='zipf',
        exponent=1.1,
        remove_prob=0.,
        rng=default_rng()
    ):
    """Sample a sequence of requests to a map.

    Parameters
    ----------
    num_requests : int
        The number of requests to sample.

    num_keys : int
        The number of distinct keys. Keys are integers in `range(num_keys)`.

    distribution : {'uniform', 'zipf'} (default: 'zipf')
        The distribution over keys. With 'zipf', the key `k` is requested with
        a probability proportional to `1 / (k + 1) ** exponent`.

    exponent : float (default: 1.1)
        The exponent of the Zipf distribution.

    remove_prob : float (default: 0.)
        The probability for each request to be a removal instead of an access.

    rng : np.random.Generator instance
        The random number generator.

    Returns
    -------
    requests : Requests
        The keys requested, and the type of each request (`OP_ACCESS` or
        `OP_REMOVE`), as two arrays of size `(num_requests,)`.
    """
    if num_keys <= 0:
        raise ValueError(f'The number of keys must be positive, got {num_keys}.')
    if not (0. <= remove_prob <= 1.):
        raise ValueError(f'The removal probability must be in [0, 1], got {remove_prob}.')

    probs = key_probabilities(num_keys, distribution=distribution, exponent=exponent)
    keys = rng.choice(num_keys, size=(num_requests,), p=probs)
    is_removal = rng.random(size=(num_requests,)) < remove_prob
    ops = np.where(is_removal, OP_REMOVE, OP_ACCESS)

    return Requests(keys=keys, ops=ops)


def replay(fixed_map, requests, progress=None):
    """Replay a sequence of requests on a map.

    Accesses follow the read-through pattern: the key is looked up, and added
    to the map (with the key itself as its value) on a miss. Removal requests
    remove the key if present.

    Parameters
    ----------
    fixed_map : `FixedMap` instance
        The map to run the requests on.

    requests : Requests
        The requests, as returned by `sample_requests`.

    progress : callable, optional
        Wrapper around the iterator over the requests (e.g. `tqdm`).

    Returns
    -------
    stats : dict
        Number of hits, misses, removals and evictions, the hit rate, and the
        final size of the map.
    """
    hits, misses, removals, evictions = 0, 0, 0, 0
    iterator = zip(requests.keys.tolist(), requests.ops.tolist())
    if progress is not None:
        iterator = progress(iterator, total=len(requests.keys))

    for key, op in iterator:
        if op == OP_REMOVE:
            if fixed_map.find(key):
                fixed_map.remove(key)
                removals += 1
            continue

        if fixed_map.lookup(key).found:
            hits += 1
        else:
            misses += 1
            size = fixed_map.size()
            fixed_map.add(key, key)
            # Every miss adds one entry; whatever is missing got evicted
            evictions += size + 1 - fixed_map.size()

    num_accesses = hits + misses
    stats = {
        'hits': hits,
        'misses': misses,
        'removals': removals,
        'evictions': evictions,
        'hit_rate': (hits / num_accesses) if num_accesses else 0.,
        'size': fixed_map.size(),
    }
    logger.info('Replayed %d requests: hit rate %.4f, %d evictions',
                len(requests.keys), stats['hit_rate'], evictions)

    return stats
