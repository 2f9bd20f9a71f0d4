# stereoscope

Building blocks for working with container images:

- `stereoscope.source`: works out where an image reference points. It may name the Docker or Podman daemon, a Docker archive, an OCI archive or directory, a registry, or a Singularity (SIF) image.
- `stereoscope.platform`: reads platform specifiers such as `linux/arm64/v8` and normalises them to an OS, an architecture and a variant.
- `stereoscope.registry`: picks basic-auth or bearer-token credentials for a given registry.
- `stereoscope.node`, `stereoscope.tree` and `stereoscope.walker`: a tree of identified nodes with a depth-first walker.
- `stereoscope.fileutils`: copies files, checks paths and fingerprints directory contents.

The package has no runtime dependencies.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```

## Usage

### Detecting an image source

```python
from stereoscope.source import Source, detect_source, parse_source_scheme

source, location = detect_source("docker-archive:images/app.tar")
assert source is Source.DOCKER_TARBALL
assert location == "images/app.tar"

assert parse_source_scheme("registry") is Source.OCI_REGISTRY
assert parse_source_scheme("DOCKER") is Source.DOCKER_DAEMON
```

The recognised schemes are `docker-archive`, `docker`, `podman`, `oci-dir`, `oci-archive`, `oci-registry` (or `registry`) and `singularity`. Case does not matter. Everything after the first `:` that follows a known scheme is the location. For path-based sources a leading `~/` in that location is expanded to the home directory.

When the input has no known scheme, `detect_source_from_path` checks the file system:

- a directory that holds an `oci-layout` entry is `Source.OCI_DIRECTORY`;
- a SIF file is `Source.SINGULARITY`;
- a tar archive holding `manifest.json` is `Source.DOCKER_TARBALL`;
- a tar archive holding `oci-layout` is `Source.OCI_TARBALL`;
- anything else, including a missing path, is `Source.UNKNOWN`.

For an unknown source, `detect_source` returns an empty location. `SourceDetectionError` is raised when a path cannot be opened, when a file is not a readable archive, or when the path starts with `~user`. `str(source)` gives display names such as `DockerTarball`. `ALL_SOURCES` lists every source except `UNKNOWN`.

### Parsing a platform

```python
from stereoscope.platform import PlatformError, new_platform

platform = new_platform("arm")
print(platform)  # linux/arm/v7

try:
    new_platform("quindows")
except PlatformError as err:
    print(err)
```

`new_platform` accepts one, two or three `/`-separated parts. When no OS is given it assumes `linux`. Architecture aliases are mapped by `normalize_arch`, for example `x86_64` to `amd64`, `aarch64` to `arm64` and `armhf` to `arm/v7`. On `arm64` the variant `v8` is dropped. `is_known_os` and `is_known_arch` tell whether a normalised name is recognised. Wildcards, invalid characters and unknown OS or architecture names raise `PlatformError`.

### Choosing registry credentials

```python
from stereoscope.registry import BearerToken, RegistryCredentials, RegistryOptions

options = RegistryOptions(
    credentials=[RegistryCredentials(authority="localhost:5000", token="token")]
)
auth = options.authenticator("localhost:5000")
assert auth == BearerToken(token="token")
```

Credentials with no authority apply to every registry. An entry that holds both a username and a password gives `BasicAuth`. Failing that, an entry with a token gives `BearerToken`. `RegistryOptions.authenticator` returns the first entry that fits, or `None` when none does.

### Trees and depth-first walks

```python
from stereoscope.node import Node
from stereoscope.tree import Tree
from stereoscope.walker import DepthFirstWalker, WalkConditions


class PathNode(Node):
    def __init__(self, path):
        self.path = path

    def id(self):
        return self.path

    def copy(self):
        return PathNode(self.path)


root, home = PathNode("/"), PathNode("/home")
tree = Tree()
tree.add_root(root)
tree.add_child(root, home)

visited = []
walker = DepthFirstWalker(tree, visited.append, WalkConditions())
walker.walk_all()
```

Nodes subclass the abstract `Node` class and implement `id()` and `copy()`. `Tree` supports `add_root`, `add_child`, `replace`, `remove_node`, `children`, `parent`, `roots`, `nodes`, `node`, `has_node`, `copy` and `len()`. `remove_node` returns every node removed with the subtree. Failed operations, such as an ID collision or a self edge, raise `TreeError`.

The walker visits each node once and takes children in ascending ID order. `WalkConditions` takes optional callables:

- `should_terminate` stops the walk, and `walk` returns that node;
- `should_visit` skips a single node;
- `should_continue_branch` prunes that node's children.

Exceptions raised by the visitor propagate to the caller.

`stereoscope.node` also provides `IDSet`, a set of node IDs with `add`, `remove`, `merge`, `clear`, `sorted` and `contains_any`. It also has `Queue`, `Stack` and `nodes_equal`, which compares two collections of nodes regardless of order.

### File helpers

`stereoscope.fileutils` provides three helpers:

- `copy_file(src, dst)` copies a file's contents;
- `file_or_dir_exists(path)` tells whether anything exists at a path;
- `dir_hash(root)` returns the hex SHA-256 of the contents of every regular file under `root`. Files are hashed in sorted depth-first order. Links to directories are followed and links to files are skipped.

## What this package does not do

It does not fetch, unpack or read container images. It does not contact the Docker or Podman daemons or any registry. Source detection only classifies the input, and credentials are only selected, never sent anywhere.

## Running the tests

```
pytest
```