# histocluster

Cluster large collections of fixed-size histograms with k-means.

`histocluster` works on histograms stored end to end in one flat sequence,
with `histogram_size` values per histogram. The sequence can be a NumPy array,
a list, or `bytes`. Raw bytes are read as unsigned octets. Values past the last
complete histogram are ignored. Centroids are seeded with k-means++. The
algorithm then iterates until the centroids stop moving or the iteration limit
is reached.

## Distances

`histocluster.distance` provides two distances:

- `earth_movers_distance(us, them)`: the one-dimensional earth mover's
  distance. It is the sum of the absolute differences between the running
  totals of the two histograms, which suits ordered bins such as strength
  distributions.
- `euclidean_distance(us, them)`: the L2 distance.

When the two histograms differ in length, both functions compare only the
common prefix.

`histocluster.inertia` provides `inertia_emd` and `inertia_euclidean`. Each
takes `(data, histogram_size, centroids, labels)` and returns the sum of each
histogram's distance to the centroid its label points to.

## Algorithms

| Function | Distance | Input values |
| --- | --- | --- |
| `histocluster.euclidean.kmeans_euclidean` | Euclidean | any numbers |
| `histocluster.euclidean.kmeans_euclidean_triangle_inequality` | Euclidean, pruned | any numbers |
| `histocluster.emd.kmeans_emd` | EMD | whole numbers 0–255 |
| `histocluster.emd.kmeans_emd_precise` | EMD | floats |
| `histocluster.emd_triangle.kmeans_emd_triangle_inequality` | EMD, pruned | whole numbers 0–255 |
| `histocluster.emd_triangle.kmeans_emd_triangle_inequality_precise` | EMD, pruned | floats |

Every function takes the arguments
`(data, histogram_size, k, max_iters, convergence_threshold, rng=None)` and
returns a `histocluster.common.KMeansResult`. A `KMeansResult` is a frozen
dataclass with three fields:

- `centroids`: a `(k, histogram_size)` float array.
- `labels`: a `uint16` array with one entry per histogram.
- `inertia`: the summed distance of each histogram to its centroid.

### Behaviour

- `ClusteringError` (a subclass of `ValueError`) is raised when `k` is less
  than one or greater than the number of histograms.
- `kmeans_emd` and `kmeans_emd_triangle_inequality` raise `ValueError` if the
  data holds anything other than whole numbers from 0 to 255.
- `kmeans_emd_triangle_inequality` requires an odd `max_iters` and raises
  `ClusteringError` otherwise. It checks for convergence only after
  odd-numbered iterations (1, 3, 5, …).
- Convergence is measured by `histocluster.common.relative_change`. This is
  the Frobenius norm of the centroid movement (`frobenius_norm`) divided by
  the norm of the new centroids. Iteration stops once the value falls below
  `convergence_threshold`. If the new centroids are all zero, the result is NaN
  or infinity, so such a set never counts as converged.
- `update_centroids` moves each centroid to the mean of its histograms. A
  cluster left empty gets a randomly chosen histogram as its new centroid.
- k-means++ seeding is done by
  `histocluster.initialization.kmeans_plusplus_euclidean` and
  `kmeans_plusplus_emd`. It raises `ValueError` when every histogram is
  already at distance zero from the chosen centroids, so no further centroid
  can be picked.

### Pruned variants

The pruned Euclidean variant keeps each histogram's label unless a centroid is
strictly closer than the squared distance recorded when that label last
changed.

The pruned EMD variants work differently. For each histogram they draw a
random reference centroid. A centroid is measured only when the triangle bound
through that reference is below the histogram's last recorded distance.

### Reproducibility

`rng` accepts anything `numpy.random.default_rng` accepts, such as a seed or a
`numpy.random.Generator`. Pass a seed or a generator to make a run
reproducible.

## Example

```python
import numpy as np

from histocluster.emd import kmeans_emd
from histocluster.logger import init_logger

init_logger()

# Three-bin histograms, stored end to end.
data = np.array(
    [10, 80, 10,   12, 78, 10,   70, 20, 10,   68, 22, 10],
    dtype=np.uint8,
)

result = kmeans_emd(data, 3, 2, 25, 1e-4, np.random.default_rng(7))
print(result.labels, result.inertia)
```

## Several initializations

`histocluster.runner.run_kmeans` runs k-means `num_initializations` times,
each time with a fresh k-means++ seed. It takes the arguments
`(data, histogram_size, round_index, k, max_iters, convergence_threshold,
num_initializations, triangle_inequality, euclidean, only_save_best, save=None,
rng=None)`. The `triangle_inequality` and `euclidean` flags select one of the
four algorithms that accept byte-valued data.

`run_kmeans_precise` does the same for float data. It always uses the EMD
algorithms, and it has no `euclidean` flag.

Both functions return a `RunSummary`, which has these fields:

- `inertia_per_initialization`
- `best_initialization_index`
- `best_inertia`
- `best_result`

`save`, if given, is called as `save(labels, centroids, round_index,
initialization_index)`. How often it is called depends on `only_save_best`:

- Without `only_save_best`, it is called after every run.
- With `only_save_best`, it is called once at the end, with the run of lowest
  inertia.

## Logging

Every module logs through the `histocluster` logger.
`histocluster.logger.init_logger(stream=None)` attaches a handler at INFO level
that writes to `stream`, or to stdout if no stream is given. It raises
`RuntimeError` if it is called a second time.

`TimestampFormatter` formats each line in local time:

```
2024-01-31 12:00:00.123 - INFO: Converged after 7 iterations
```

## What the package does not do

`histocluster` has no command-line program, and it does not read or write
histogram, label or centroid files. Load your data into an array yourself. To
store results, pass a `save` callable to the runner functions.