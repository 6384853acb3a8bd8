# toba

`toba` is a small command-line tool for local WordPress projects. It manages
a shared global configuration file, checks and normalizes project settings,
and provides a pipeline that runs setup steps one after another, in parallel
stages, or as a dependency graph.

## Installation

```
pip install .
```

## Commands

```
toba config
```

Creates or refreshes the global configuration file. The file is `toba/.env`
inside your user configuration directory. On Linux and other Unix systems
this is `$XDG_CONFIG_HOME` when that variable is set, and `~/.config`
otherwise. On macOS it is `~/Library/Application Support`, and on Windows it
is `%APPDATA%`. If the file already exists, `toba` asks
`Overwrite existing global config at ...? [y/N]:`. Only `y` or `yes` allows
the overwrite. The new content comes from a `.env` file, or failing that a
`.env.example` file, in the current directory when that directory is the
tool's own source tree. That means it has a `pyproject.toml` that names the
project `toba` and contains `toba/cli.py`. Otherwise `toba` writes a built-in
template:

```
TOBA_PHP_VERSION=
TOBA_STARTER_REPO=
TOBA_SSH_TARGET=
TOBA_REMOTE_WORDPRESS_ROOT=
```

`toba config` takes no arguments.

```
toba create [project-name] [--php=8.4] [--starter-repo=git@example.com:org/repo.git] [--ssh-target='user@host -p port'] [--remote-wordpress-root='www/example.com'] [--dry-run]
```

Reads the global configuration and prints `Using config from <path>` when it
is found. Command-line options then override the configuration values. The
command checks the project name and prints the project root (a directory
named after the project under the current directory), the domain and the
PHP version. You can give the project name before or after the options.
Names are lowercased and may contain only letters, digits, `-` and `_`.

```
toba version
```

Prints `toba version: 1.2.1 dev`.

Running `toba` with no command prints the usage text and exits with status 0.
An unknown command prints the usage text and exits with status 1. Errors are
printed to stderr as `Error: ...`, and the exit status is 1.

## Global configuration

The configuration file holds simple `KEY=VALUE` lines. Blank lines and lines
that start with `#` are ignored. An `export ` prefix is allowed, and quotes
around a value are removed. A line without `=` is an error.

```
TOBA_PHP_VERSION=8.4
TOBA_STARTER_REPO=git@example.com:company/starter.git
TOBA_SSH_TARGET=user@host.example.com -p 22
TOBA_REMOTE_WORDPRESS_ROOT=www/example.com
```

## Library use

- `toba.config.ProjectConfig`: project settings. `normalize()` lowercases and
  checks the name and raises `ValueError` for an invalid one. It defaults the
  PHP version to `8.4`, sets the domain to `<name>.lndo.site` with `_`
  turned into `-`, and sets the database to `wordpress`.
- `toba.paths.new_project_paths(base_dir, project_name)`: returns a
  `ProjectPaths` with the root, `app`, `config`, `app/wp-content` and its
  `plugins`, `uploads` and `themes` directories, and `app/database.sql`.
- `toba.env`: `global_env_path()`, `load_env_file(path)`,
  `resolve_env_config()`, `load_env_config()`,
  `resolve_global_env_initialization(source_dir)` (returns an
  `EnvInitialization`) and `write_global_env(target_path, content)`. The last
  one raises `PermissionError` with a clear message when the file cannot be
  written.
- `toba.config_command.run_config(stdin, stdout, cwd)`: the `toba config`
  flow with the streams and directory you pass.
- `toba.pipeline.Pipeline`: runs `nodes` (`StepNode` entries, each of which
  starts as soon as its dependencies finish), or else `stages` (`Stage`,
  either sequential or parallel), or else plain `steps`. A step is any object
  with a `name` and a `run(ctx)` method. The pipeline raises the first step
  error and logs a `CodedError` with its code. An optional `recorder`
  callable receives a `StepTiming` for each step that ran. An invalid graph
  raises `ValueError`, and a graph that cannot finish raises `RuntimeError`.
- `toba.context`: `Context`, `StarterData` and
  `new_context(base_dir, config, logger, runner)`.
- `toba.logger`: `ConsoleLogger` writes `[STEP]`, `[INFO]`, `[PROMPT]`,
  `[WARNING]`, `[OK]`, `[ERROR]` and `[ERROR][CODE]` lines.
  `SynchronizedLogger` and `synchronized(logger)` make a logger safe to use
  from several threads.
- `toba.errors.CodedError`: an exception that carries a code, a message and
  an optional cause.
- `toba.cleanup`: `cleanup_failed_install(ctx, stdin)` asks whether to delete
  a project directory left by a failed run. `destroy_lando_app(ctx)` passes
  `lando destroy -y` to the context's runner when the root has a
  `.lando.yml`.
- `toba.version`: `normalize_version`, `is_dev_build`, `resolved_version`,
  `run_version` and `BuildInfo`.

## What it does not do

`toba create` only checks the settings and reports where the project would
go. It does not create directories or generate Lando or PHP configuration.
It does not fetch starter data over SSH, clone or build a theme, or install
WordPress or import a database. The package ships no setup steps of that
kind and no command runner. The pipeline runs whatever steps and runner you
give it. There is no `doctor` command for checking system dependencies.

## Running the tests

```
pip install .[test]
pytest
```