import argparse
import importlib.util
import os
import sys
import time
from pathlib import Path
from .core import SceneNode
from .compiler import TemplateCompiler, DEFAULT_TEMPLATE, evaluate
from .output import LineOutput

try:
    from watchdog.observers import Observer
    from watchdog.events import FileSystemEventHandler
    WATCHDOG_AVAILABLE = True
except ImportError:
    WATCHDOG_AVAILABLE = False


def load_scene(script_path=None) -> SceneNode:
    """
    Builds the scene returned by `main()` in a user script.

    Without a script, the bundled demo scene is used.
    """
    if script_path is None:
        from .demo import main as demo_main
        return demo_main()

    spec = importlib.util.spec_from_file_location("user_scene", script_path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    if not (hasattr(module, 'main') and callable(module.main)):
        raise ValueError(f"No `main` function found in '{script_path}'")
    scene = module.main()
    if not isinstance(scene, SceneNode):
        raise TypeError(f"`main` in '{script_path}' returned {type(scene).__name__}, expected a SceneNode")
    return scene


def build(scene_path=None, template_path=None, prop=None) -> str:
    """Generates shader source for the given scene script and template."""
    scene = load_scene(scene_path)
    if prop is not None:
        result = evaluate(scene, prop)
        lines = result.lines if result.ok else result.lines + [result.comment()]
        return "\n".join(lines) + "\n"

    compiler = TemplateCompiler.from_path(template_path or DEFAULT_TEMPLATE)
    output = LineOutput()
    for result in compiler.compile(scene, output):
        if not result.ok:
            print(f"WARNING: <{result.prop}> {result.error}", file=sys.stderr)
    return output.getvalue()


def write(source: str, output_path=None):
    if output_path is None:
        sys.stdout.write(source)
        return
    with open(output_path, 'w') as f:
        f.write(source)
    print(f"SUCCESS: Shader written to '{output_path}'.", file=sys.stderr)


class Watcher:
    """Recompiles the shader whenever the scene script or template changes."""
    def __init__(self, args):
        self.args = args
        self.paths = {os.path.abspath(p) for p in (args.scene, args.template) if p}
        self.reload_pending = False

    def rebuild(self):
        try:
            write(build(self.args.scene, self.args.template, self.args.property), self.args.output)
        except Exception as e:
            print(f"ERROR: Failed to rebuild shader: {e}", file=sys.stderr)

    def run(self, poll_interval: float = 0.25):
        if not self.paths:
            print("INFO: Nothing to watch; pass --scene or --template.", file=sys.stderr)
            return

        class ChangeHandler(FileSystemEventHandler):
            def __init__(self, watcher):
                self.watcher = watcher
            def on_modified(self, event):
                if os.path.abspath(event.src_path) in self.watcher.paths:
                    self.watcher.reload_pending = True

        observer = Observer()
        for directory in {str(Path(p).parent) for p in self.paths}:
            observer.schedule(ChangeHandler(self), directory, recursive=False)
        observer.daemon = True
        observer.start()
        names = ", ".join(sorted(Path(p).name for p in self.paths))
        print(f"INFO: Watching {names} for changes...", file=sys.stderr)
        try:
            while True:
                if self.reload_pending:
                    self.reload_pending = False
                    print("INFO: Change detected. Rebuilding...", file=sys.stderr)
                    self.rebuild()
                time.sleep(poll_interval)
        except KeyboardInterrupt:
            pass
        finally:
            observer.stop()
            observer.join()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='sdfsplice',
        description="Compile an SDF scene graph into a GLSL fragment shader template.")
    parser.add_argument('--scene', help="Python script whose main() returns the root scene node (default: bundled demo)")
    parser.add_argument('--template', help="Shader template with #evaluate <property> directives (default: bundled raymarcher)")
    parser.add_argument('-o', '--output', help="Write the shader to this file instead of stdout")
    parser.add_argument('--property', help="Only print the declarations for one property (sdf, normal or color)")
    parser.add_argument('--watch', action='store_true', help="Rebuild the output whenever the scene or template changes")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.watch and not args.output:
        print("ERROR: --watch requires --output.", file=sys.stderr)
        return 2

    try:
        write(build(args.scene, args.template, args.property), args.output)
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.watch:
        if not WATCHDOG_AVAILABLE:
            print("INFO: Watching disabled. `watchdog` not installed. Run 'pip install watchdog'.", file=sys.stderr)
            return 0
        Watcher(args).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
