# asciimotion

Convert still images, animated GIF and WebP files, and videos into text art,
and play the result in your terminal in full colour.

Each frame is scaled to the size of the terminal with nearest-neighbour
sampling. Its brightness is mapped onto a table of characters, darkest first,
and each character is drawn in the 24-bit colour of the pixel it stands for.

## Installation

```
pip install asciimotion
```

Images and animations are decoded with Pillow. Videos are decoded by running
`ffmpeg`. Their size and frame rate come from running `ffprobe`. Both programs
must be on your `PATH` to play video. Any file that is not a known image, GIF
or WebP is treated as a video.

## Playing media

```
asciimotion play picture.png
asciimotion play animation.gif --loop
asciimotion play movie.mp4 --fps 24 --allow-frame-skip
```

Playback uses the terminal's alternate screen. On POSIX terminals, input is
switched to raw mode while playing. Press `q`, `Q`, `Esc` or `Ctrl-C` to stop.
When the terminal is resized, the output is rescaled to the new size.

Arguments and options:

| Argument / option | Meaning |
| --- | --- |
| `action` | `play` or `export` |
| `input` | file to open |
| `-o`, `--output FILE` | output file name (accepted, see below) |
| `-f`, `--fps FPS` | force a frame rate. Without it, the media's own rate is used, or 30 if it has none. |
| `-l`, `--loop` | start again from the first frame when the media ends |
| `-c`, `--char-map CHARS` | custom character table, darkest first. The default is the single character `⣿`. |
| `-g`, `--gray` | draw without colour |
| `-w`, `--w-mod N` | width modifier. It is stored in the render options but does not currently change the output. |
| `-a`, `--allow-frame-skip` | drop frames to keep up with the target rate |
| `-n`, `--new-lines` | end each row of output with `\r\n` |
| `-V`, `--version` | print the version |

Recognised inputs:

* Images: PNG, BMP, ICO, TIF/TIFF and JPG/JPEG.
* Animations: GIF and WebP.
* Videos: MP4, AVI, WebM, MKV, MOV, FLV and OGG, plus any other extension.

When opening or reading fails, the command prints `Error: ...` to standard
error and exits with status 1.

## What it does not do

The `export` action opens the input and then stops. It writes no file, and
`--output` is not used. Only `play` produces output.

## Using the library

```python
from asciimotion.frames import open_media
from asciimotion.maps import CharMap
from asciimotion.pipeline import FixedResolution, ImagePipeline
from asciimotion.render import RenderOptions, Renderer

media = open_media("animation.gif")
pipeline = ImagePipeline(FixedResolution(80, 24), CharMap.CHARS1, new_lines=True)
renderer = Renderer(pipeline, media.frames, RenderOptions(fps=media.fps or 30.0))

frame = renderer.render_frame(next(iter(media.frames)))
print(frame.text)
```

### Opening media

`asciimotion.frames` provides the functions that open media:

* `open_media(path)` chooses a decoder by file extension and returns a
  `MediaData` with `frames` and `fps`.
* `open_image`, `open_gif`, `open_webp` and `open_video` open one kind of file
  each.

The frame sources returned are `StillImage`, `AnimatedImage` and `VideoStream`.
All of them are iterators of Pillow images and support `skip_frames(n)` and
`reset()`. A `VideoStream` should be closed with `close()`, or used as a
context manager.

The frame rate of a GIF or WebP is an average taken over all of its frames.

### Converting frames

`asciimotion.pipeline.ImagePipeline(resolution, char_map, new_lines)` does the
conversion:

* `resize(img)` scales an image to the pipeline's resolution.
* `to_ascii(gray)` maps a grayscale image to text.

There are two kinds of resolution:

* `FixedResolution(width, height)` gives an exact size.
* `DivisorResolution(divisor)` divides the source size by an integer.

Built-in character maps are on `asciimotion.maps.CharMap`: `CHARS1`, `CHARS2`,
`CHARS3`, `SOLID`, `DOTTED`, `GRADIENT`, `BLACK_WHITE`, `BW_DOTTED` and
`BRAILLE`. A plain string of characters also works as a map.

### Rendering

`Renderer.render_frame(image)` returns a `RenderFrame` with two fields:

* `text`, the converted frame.
* `colors`, the RGB bytes, three per character. When new lines are on, six
  zero bytes are added after each row.

`Renderer.run(allow_frame_skip, callback)` drives playback at the target frame
rate. On every turn it calls `callback` with a `CallbackState` (`frame`,
`should_render`, `pipeline`) and stops once the callback returns `False`.

`RenderFrame.render_to_image(font_px, background_color)` draws a rendered frame
into an RGBA Pillow image using Pillow's default font. Each character gets a
`font_px`-sized cell.

### Terminal output

`asciimotion.terminal_player.TerminalPlayer` is the player used by the
`asciimotion` command. It can also be used as a context manager. Its
`callback()` method returns a function that can be passed to `Renderer.run`.

### Errors

Errors are raised as `asciimotion.errors.ApplicationError` or
`asciimotion.errors.PipelineError`. Both derive from `AsciiMotionError`.