"""
Denylist matching and hot-reload engine.

- **pattern_compiler.py**: Turns the lines of the denylist file into case-insensitive rules,
  skipping blank lines and logging lines that fail to compile.

- **denylist_store.py**: Holds the active rules and swaps in a new set on reload. A reload
  that yields no rules never replaces the current set.

- **denylist_watcher.py**: watchdog-based watcher that reloads the store on every change
  to the denylist file until the process asks it to stop.

- **exemptions.py**: Declarative exceptions (greeting keyword in a social channel,
  wallet addresses outside faucet channels) checked after a rule matches.

- **message_evaluator.py**: Pure decision function from a message and a denylist
  snapshot to a deletion decision.

- **moderation_action.py**: Deletes the message and logs the audit record.
"""
