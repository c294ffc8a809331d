# displayarrange

The state behind a desktop's display settings. The package models the
connected outputs and their modes. It lays the outputs out on a
drag-and-drop arrangement canvas. It turns the changes a user makes into
argument lists for the `cosmic-randr` program.

## Modules

### `displayarrange.geometry`

`Point` and `Rectangle` are frozen dataclasses.

- `Point.distance` gives the Euclidean distance to another point.
- `Rectangle` has `center_x`, `center_y` and `center`.
- `Rectangle.contains(point)` excludes the right and bottom edges.
- `Rectangle.intersects(other)` does not count rectangles that only touch.

### `displayarrange.randr`

- `Transform` is a string enum: `normal`, `rotate90`, `rotate180`,
  `rotate270`, `flipped`, `flipped90`, `flipped180` and `flipped270`.
  `Transform.is_landscape()` is true for `normal`, `rotate180`, `flipped`
  and `flipped180`.
- `Mode` holds a `size` and a `refresh_rate` in millihertz.
- `Output` holds a name, an enabled flag, a position, a scale, a transform,
  its mode keys and its current mode key.
- `OutputList` stores modes and outputs. `add_mode` and `add_output` return
  the integer key of what they store. `current_mode(key)` returns the
  current `Mode` of an output, or `None`.

### `displayarrange.tabs`

`DisplayTabs` is an ordered, single-selection list of tabs. Each tab carries
a label and an output key.

- `insert(text, key)` appends a tab and returns its entity.
- `activate` and `activate_position` select a tab. `activate` raises
  `KeyError` for an unknown entity. `activate_position` ignores a position
  that is out of range.
- `active()` and `active_key()` return the active entity and its output key.
- `key_of`, `text_of` and `entities` look tabs up.

### `displayarrange.arrangement`

The canvas works in units of 12 output pixels (`UNIT_PIXELS`).

- `layout_size(outputs)` returns the canvas size and the largest display
  size. The canvas leaves room of twice the largest display around the area
  that the enabled outputs occupy.
- `display_regions` yields the rectangle of every enabled output in tab
  order. `region_at` returns the first region that contains a point.
- `update_dragged_region` moves a dragged region towards a position and
  attaches it to the nearest side of its nearest neighbour. It snaps to that
  neighbour's edges within 8 units. If the result would overlap another
  display, it returns the region unchanged.
- `Arrangement(outputs, tabs, on_pan=None, on_placement=None, on_select=None)`
  handles pointer events:
  - `layout()` computes the canvas size.
  - `button_pressed` starts a drag on the display under the pointer.
  - `cursor_moved` moves the dragged display. Within 150 units of the
    viewport's edges it also calls `on_pan` with `Pan.LEFT` or `Pan.RIGHT`.
  - `button_released` ends the drag. A release within 4 units of the press
    calls `on_select` with the tab entity. Any other release calls
    `on_placement(key, x, y)` with the new position in output pixels.
  - `mouse_interaction` returns `"grab"` over a display and `"idle"`
    everywhere else.
  - Each handler returns whether it consumed the event.

### `displayarrange.commands`

The requests are frozen dataclasses: `Mirror`, `Position`, `RefreshRate`,
`Resolution`, `Scale`, `SetTransform` and `Toggle`.

- `randr_args(outputs, output, request)` builds the argument list for a
  request, such as `["mode", "--scale", "1.50", "DP-1", "1920", "1080"]`. It
  returns `None` when the request names an unknown output, or when it needs
  a current mode that the output lacks.
- `run_randr(args)` runs `cosmic-randr` with the arguments and returns its
  exit status.
- `format_refresh_rate` and `cache_rates` turn millihertz into menu labels
  such as `" 60.00 Hz"`.

### `displayarrange.page`

`Page(runner=None)` holds the state of the settings page. Every change goes
through `runner`, which receives an argument list; the default is
`run_randr`.

- `update_displays(outputs)` loads an output list, with the tabs sorted by
  output name. The previously active display stays active when it is still
  there.
- `set_display(entity)` makes a display active. It rebuilds that display's
  resolution list (largest first), refresh-rate labels, scale and
  orientation selection, and mirroring menu.
- `set_resolution`, `set_refresh_rate`, `set_scale` and `set_orientation`
  change the active display. Each takes an index into its menu. Scales run
  from 50% to 200% in 25% steps.
- `set_position(display, x, y)` moves an output.
- `toggle_display(enable)` enables or disables the active display.
- `set_mirroring` takes a `Mirroring` (`disable()`, `project(key)` or
  `mirror(key)`, of kind `MirrorKind`).
- `pan(direction)` moves the relative scroll offset of the arrangement
  view by 0.01, within 0 and 1, and returns the new offset.

Changing the resolution, scale, orientation or enabled state opens a
confirmation dialog, but only when the change differs from the current
setting. `page.dialog` holds the request that would undo the change, and
`page.dialog_countdown` starts at 10. The dialog ends in one of three ways:

- Call `dialog_tick()` once a second. When the countdown has run out,
  `dialog_tick()` applies the undo request.
- Call `dialog_complete()` to keep the change.
- Call `dialog_cancel()` to revert at once.

An `OSError` from the runner is logged rather than raised.

## Example

```python
from displayarrange.arrangement import Arrangement
from displayarrange.geometry import Rectangle
from displayarrange.page import Page
from displayarrange.randr import Mode, Output, OutputList

outputs = OutputList()
mode = outputs.add_mode(Mode(size=(1920, 1080), refresh_rate=60000))
outputs.add_output(Output(name="DP-1", modes=[mode], current=mode))
outputs.add_output(Output(name="DP-2", position=(1920, 0), modes=[mode], current=mode))

calls = []
page = Page(runner=lambda args: calls.append(args) or 0)
page.update_displays(outputs)

page.set_scale(4)  # 150%
# calls[-1] == ["mode", "--scale", "1.50", "DP-1", "1920", "1080"]
# page.dialog_countdown == 10

canvas = Arrangement(page.outputs, page.tabs, on_placement=page.set_position)
width, height = canvas.layout()
bounds = Rectangle(0.0, 0.0, width, height)
```

## What the package does not do

- It draws nothing. The canvas and page keep state and report events, but
  rendering them is left to the caller.
- It does not discover outputs or watch for changes. The caller fills
  `OutputList` and calls `Page.update_displays` again when the outputs
  change.
- It has no command-line entry point.
- Menu labels such as orientations and mirroring choices are fixed English
  strings.
- Colour depth and colour profile are not configurable.

## Requirements

Python 3.10 or later. The package uses only the standard library. The tests
use pytest (`pip install .[test]`).