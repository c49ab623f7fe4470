"""Starter .carapace.toml template."""

DEFAULT_TOML = """\
# Carapace Configuration
version = "1.0"

[chunking]
max_tokens = 12000        # estimated tokens per chunk (1 token = 3 characters)

[output]
format = "terminal"       # terminal | json
show_summary = true

[rules]
rulesets = ["general", "attack", "quality"]   # solidity rules follow .sol files automatically
# enable = ["gen-security"]                    # empty = all enabled
# disable = ["qual-magic-numbers"]

[ignore]
# files = ["dist/*", "*.lock"]

[logging]
level = "warning"         # debug | info | warning | error
json = false
"""
