# lvjb

A fast, minimal build and test tool for Java projects. It drives `javac`,
`java`, `javadoc` and `jar`. Builds are incremental. A content hash of each
source file decides what gets recompiled, and file timestamps are not used.

## Installation

```
pip install .
```

You need a JDK with `javac`, `java`, `jar` and `javadoc` on `PATH`. Build
hooks run through `sh`.

## Usage

```
lvjb <command> [args]
```

| Command | What it does |
| --- | --- |
| `init` | Writes `lvjb.toml` and `lvjb.lock` if they are missing, and creates the project directories |
| `initpkg <pkg>` | Creates the folder tree under `src/` for a dotted package name |
| `build [pkg\|all] [--re]` | Compiles sources. Builds are incremental unless `--re` is given |
| `test` | Compiles the sources under `test/`, then runs every test class in parallel |
| `run [MainClass] [-- args...]` | Runs the given class, or the configured `entry_point` if none is given |
| `clean` | Deletes every `.class` file under `bin/` and deletes `lvjb.lock` |
| `docgen <path>` | Runs `javadoc` on the sources under `src/<path>` and writes the output to `docs/` |
| `curl <url>` | Downloads a file into `lib/` and records its URL in the cache |
| `release` | Builds everything, then packages `bin/` into `releases/<jar>-<version>.jar` |
| `--help` | Prints the usage text |

Every command except `init` and `--help` must run in an initialised project
directory, that is, a directory that contains `lvjb.toml`. The exit status is
0 on success and 1 on failure.

## Example

```
lvjb init
lvjb initpkg com.example.app
lvjb build com.example.app
lvjb run com.example.app.Main
```

## Configuration

`lvjb.toml` holds the project settings. A fresh project starts with these values:

```toml
jar = "out"
compiler = "javac"
src_ext = "java"
classpath = ["bin", "lib/*"]
incremental = true
pre_build_cmds = []
post_build_cmds = []
log_level = 0
version = "0.0.1"

[paths]
src = "src"
src_nopkg = "default"
bin = "bin"
lib = "lib"
test = "test"
docs = "docs"
releases = "releases"

[args]
# compilation = ["-Xlint"]
# runtime = ["arg1"]
# jvm = ["-Xmx512m"]
```

Keys you leave out take the values shown above. Set `entry_point` to use
`run` without a class name and to use `release`. The `init` command also
writes a `[cache]` table into `lvjb.toml`.

### Notes

- `build` with no argument compiles only `src/default/`. `build all` compiles
  everything under `src/`. `build <pkg>` compiles that package together with
  any changed sources in `src/default/`. When the build is not incremental,
  every form compiles all of `src/`.
- In `classpath`, an entry that ends in `/*` expands to every `.jar` file in
  that directory. Entries are joined with `:`.
- `args.compilation` is appended to the compiler command line.
  `args.runtime` is passed to the program by `run` and `test`. Arguments given
  after `--` on the `run` command line are added to it. `args.jvm` is passed
  to `java`. `args.test` is read but not used.
- Each command in `pre_build_cmds` and `post_build_cmds` runs with `sh -c`. A
  failing hook stops the build. Pre-build hooks run even when nothing needs
  compiling. Post-build hooks run only after a successful compilation.
- A test passes when its class exits with status 0. Each test class runs in
  its own `java` process.
- `lvjb.lock` records file hashes, fetched URLs and past releases. If you
  release the same build a second time, you get an error. `release` writes a
  temporary `MANIFEST.MF` in the current directory.

## Python API

The commands are available as functions in `lvjb.cmds`: `init`, `initpkg`,
`build`, `run`, `test`, `clean`, `docgen`, `curl`, `release`, `help_text` and
`print_help`. Each one takes a `lvjb.config.Config`. Failures raise
`lvjb.spawn.LvjbError` or `OSError`.

Other modules:

- `lvjb.config`: `Config`, `PathConfig` and `ArgConfig`, which load and write `lvjb.toml`.
- `lvjb.cache`: `Cache`, which loads and writes `lvjb.lock`.
- `lvjb.paths`: `PathType`, `forge_sys_path`, `class_to_path`, `fetch_files_under` and `expand_classpath`.
- `lvjb.incremental`: `content_hash` and `check_incremental`.
- `lvjb.jvm`: `jvm_options` and `java_command`.
- `lvjb.spawn`: `run_hooks`, `compilation_command` and `spawn_compilation_command`.
- `lvjb.cli`: `main`, the command-line entry point.