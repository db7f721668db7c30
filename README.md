# dxtool

A library of helpers for everyday developer chores around git, GitHub and
kubeconfig contexts. Every operation works through objects you pass in (a
command runner, an API client, a kubeconfig handler, a prompter), so the
logic can be driven by real implementations or by test doubles.

## Modules

### `dxtool.git`

Builds git commands as `Command(name, args, dir)` values and hands them to a
runner: any object with `run_without_retry(command) -> str`.

- `get_remote(runner, name)` – push URL of the named remote from
  `git remote -v`, or `""` if there is none.
- `extract_url_from_remote(text, name)` – the same lookup on text you already
  have.
- `extract_host_org_and_repo_url(url)` – splits a URL such as
  `https://github.com/example/project.git` into `("github.com", "example",
  "project")`; a path that is not exactly `/org/repo` raises `GitError`.
- `local_changes(runner, directory)` – `True` when `git status --porcelain`
  reports changes to tracked files; untracked (`??`) files are ignored.
- `current_branch_name`, `stash`, `stash_pop`, `add`, `commit`, `status`
  return the runner's output; `config_committer_information` and
  `config_property` set git configuration values.

### `dxtool.gh`

GitHub REST lookups through a client with
`rest(host, method, path, body=None)` returning decoded JSON:
`get_default_branch(client, host, org, repo)`,
`get_current_user(client, host)` and `get_orgs_for_user(client, host)`.

### `dxtool.rebase`

`Rebase(client, runner, force_with_lease=False)`:

- `validate()` reads the `origin` and `upstream` remotes and looks up their
  default branches. It raises `RebaseError` when both remotes have the same
  URL; a missing `upstream` is only logged as a warning.
- `run()` returns `False` (and logs an error) if there are local changes or
  the current branch is not origin's default branch. Without an upstream it
  runs `git pull --tags origin <branch>`; otherwise it fetches the upstream
  branch with tags, rebases onto `upstream/<branch>` and pushes to origin,
  adding `--force-with-lease` when asked. It then returns `True`.

### `dxtool.repos`

`RepoManager(client, prompter)` lists repositories as `RepoInfo(name,
full_name)` with `list_repositories_for_org` and
`list_repositories_for_user`. `select_repositories` asks the prompter
(`select_multiple_from_options(message, options)`) which to delete, and
`delete_repositories_from_org` / `delete_repositories_from_user` send a
`DELETE` for each chosen repository and return the chosen names.

### `dxtool.search`

`GetSecurityConfig(client, config)` and `GetVulnerabilityAlerts(client,
config)` run a GraphQL repository search on every server the configuration
names (`configured_servers()`), querying the repositories from
`repos_to_query(host)`. The client needs `graphql(host, query)`. `run()`
stores the result nodes, as dictionaries, in `repositories` or `alerts`;
`validate()` raises `ValueError` if the client or configuration is missing.

### `dxtool.kubecontext`

`KubeConfig` and `KubeEntry` model the parts of a kubeconfig that matter
here. Loading and saving are delegated to a "kuber" object
(`load_api_config`, `load_api_config_from_path`, `set_kube_context`,
`set_kube_config`, `get_current_namespace`, `set_kube_namespace`).

- `Context` – `validate()` loads the config and, if no context was given,
  asks the prompter to choose one (current context as default); `run()`
  makes it current.
- `ImportContext` – `validate()` requires a `path` (else `ValueError`) and
  loads both configs; `run()` copies the other config's contexts, users,
  clusters and extensions in, marking the copied entries with the location
  of the current context, and saves the result.
- `Namespace` – `validate()` lists namespaces through a `lister`
  (`list_namespaces()`), sorts them and asks the prompter to choose;
  `run()` prints the choice and sets it on the current context.

### `dxtool.httpmock`

A `Registry` of `Stub`s for exercising HTTP code without a network.
`round_trip(Request)` answers with the first unused matching stub (each
stub answers once) and records the request in `requests`; with no match it
raises `LookupError`. `verify()` raises `AssertionError` if any stub was
never used. Helpers: `match_any`, `string_response`, `stub_response`,
`stub_with_fixture`, and canned repository payloads
(`repo_network_stub_response`, `repo_network_stub_fork_response` and the
`stub_repo_response*` / `stub_forked_repo_response` methods).

## Example

```python
from dxtool.git import extract_host_org_and_repo_url, extract_url_from_remote

remotes = """origin  https://github.com/example/project (fetch)
origin  https://github.com/example/project (push)"""

url = extract_url_from_remote(remotes, "origin")
print(extract_host_org_and_repo_url(url))  # ('github.com', 'example', 'project')
```

Stubbing HTTP in a test:

```python
from dxtool.httpmock import Registry, Request

registry = Registry()
registry.stub_response(200, '{"login": "octocat"}')
response = registry.round_trip(Request("GET", "https://api.github.com/user"))
assert response.status_code == 200
assert response.json() == {"login": "octocat"}
registry.verify()
```

## What it does not do

dxtool is a library only: it has no command-line program. It does not
itself run git, talk to GitHub over HTTP, read or write kubeconfig files,
list namespaces from a cluster or prompt on a terminal. Those jobs belong to
the runner, client, kuber, lister and prompter objects you supply.

## Installing

```
pip install dxtool
pip install "dxtool[test]"   # with the test dependencies
```

Run the tests with `pytest`.