# datagen package
# src/datagen/__init__.py
"""
Driver side of the extractor.

- driver:         fixed dataset order, one scratch buffer per run
- sink:           where finished files go (directory or memory)
- config:         datagen.yaml resolution
- errors:         fatal error types
- logging_config: root logging setup for the CLI
- cli:            `mc-datagen` entry point

Import submodules directly (`from datagen.driver import run_datagen`); this
package does not re-export them so that low-level packages can depend on
`datagen.errors` without pulling in the driver.
"""
