# keyshow

keyshow shows the keys you press while you press them. It is handy for
screencasts, live demos and teaching. Keystrokes are read straight from the
Linux input devices under `/dev/input`, so it works no matter which window
has focus.

## Installing

```
pip install .
```

keyshow has no dependencies outside the standard library. The overlay
window uses `tkinter`, so your Python needs Tk support for that mode.

Reading `/dev/input/event*` usually needs root or membership in the
`input` group. A device counts as a keyboard when it reports the A, ENTER
and SPACE keys.

## Running

```
keyshow
```

This opens the overlay: an undecorated, always-on-top window that stays
hidden until the first key press. To show the keys in the terminal instead:

```
keyshow --console
```

Logging goes to standard error. Its level comes from the `KEYSHOW_LOG`
environment variable (for example `KEYSHOW_LOG=info`) and is `ERROR` by
default. If the overlay window cannot be opened, `keyshow` logs the error
and exits with status 1.

Press Ctrl+C to stop.

## What it shows

- Up to 10 recent keys, oldest first.
- All keys are cleared once 3 seconds have passed since the last key press.
- Keys get short labels: letters and digits as themselves, `SPACE`,
  `ENTER`, `BKSP`, `TAB`, `ESC`, `DEL`, `HOME`, `END`, `PGUP`, `PGDN`, the
  arrows as `UP`/`DOWN`/`LEFT`/`RIGHT`, `F1` to `F12`, punctuation as its
  character, and `SHIFT`, `CTRL`, `ALT`, `META` for both left and right
  modifiers. Other keys show their kernel name, such as `KEY_CAPSLOCK`.
- In overlay mode, held modifiers are joined with the key they go with,
  sorted by name, for example `CTRL+SHIFT+T`. The newest key is drawn larger
  with a brief highlight, and older keys fade out as they age.
- In console mode the screen lists the keys on one line, the time since the
  last key, and the five newest keys, newest first. Modifiers are listed as
  keys of their own there.

## Limitations

- Linux only: keys come from evdev devices under `/dev/input`.
- Labels follow key positions, not the active keyboard layout.
- The number of keys, the timeout and the colours are fixed; there are no
  command-line options besides `--console`.

## Using it as a library

The pieces can be used on their own:

- `keyshow.keys`: `KeyEvent`, `key_name`, `format_key_name`,
  `is_modifier_key` and `make_key_event` turn raw key codes into labelled
  events.
- `keyshow.input`: `InputHandler` finds keyboards and sends their
  `KeyEvent`s to an asyncio queue. `decode_events` parses raw input-event
  records, `supports_keyboard_keys` checks a key capability bitmask,
  `is_keyboard_device` probes a device and `read_device` reads one device
  into a queue.
- `keyshow.display`: `KeyDisplay` holds the recent keys and drops them after
  a timeout. `ModifierTracker` builds combinations such as `ALT+F4`.
- `keyshow.console`: `ConsoleRenderer` draws to a terminal or any text
  stream.
- `keyshow.gui`: `OverlayState`, `key_style` and `age_factor` work out what
  the overlay draws. `GuiRenderer` runs the overlay window.
- `keyshow.app`: `App`, `RenderMode`, `parse_mode` and `main` tie it all
  together.

## Tests

```
pip install .[test]
pytest
```