"""NEOBUNDLE test suite.

Folder taxonomy
- unit/         : Isolated checks of the parser, resolvers, model and helpers.
- integration/  : Loading real YAML files and bootstrapping the service map.
- e2e/          : The `neobundle` CLI driven through Click's test runner.
- fixtures/     : Shared configuration fixtures (no tests here).

General guidance
- Keep unit fast and deterministic; build configs with `make_config`.
- Integration and e2e tests write YAML with `write_config` under `tmp_path`.
- Property-based tests live with the layer they exercise (Hypothesis).
- Marks (unit, integration, e2e) are applied from the folder automatically.
"""
