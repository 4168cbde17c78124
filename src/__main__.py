#!/usr/bin/env python3
"""
msgmarkup - Inline message markup formatter

Formats a chat message written in constrained markdown-like markup into an
HTML fragment ready to be inserted into a message-content subtree.

As with other ChRIS-style tools, the CLI is a ChRIS "plugin": it reads from
an input directory and writes to an output directory.

Markup:
    **bold**   __italic__   ~~strikethrough~~   ||spoiler||
    `inline code`   ```lang
    fenced block
    ```

Usage:
    msgmarkup inputdir/ outputdir/ --inputFile message.txt

Examples:
    # Basic formatting
    msgmarkup . output/ --inputFile message.txt

    # Also dump the AST and a plain-text rendition
    msgmarkup . output/ --inputFile message.txt --emitAST --plainText

    # Highlighted fenced blocks, verbose output
    msgmarkup . output/ --inputFile message.txt --highlight -vv
"""

import sys
import json
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import Parser, Serializer, text_extract, ast_toDicts, __version__, LOG, state_connectToLogger
from .lib.log import sink_configure
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    description="msgmarkup - format chat message markup into HTML",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input message file (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default="",
    type=str,
    help="Output HTML file (relative to outputdir). Defaults to inputFile with an .html suffix",
)

parser.add_argument(
    "--emitAST",
    action="store_true",
    default=False,
    help="Also write the parsed AST as <name>.ast.json",
)

parser.add_argument(
    "--plainText",
    action="store_true",
    default=False,
    help="Also write the message with formatting removed as <name>.txt",
)

parser.add_argument(
    "--highlight",
    action="store_true",
    default=False,
    help="Highlight fenced blocks that carry a language tag",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the input message
            - htmlOutputFile: Resolved path of the HTML to write
            - envOK: True if environment is valid

    Exits:
        1 if the input file is not found
    """
    from .config import appsettings

    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile

    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    output_name = state.outputFile or appsettings.outputName_make(state.inputFile)
    state.htmlOutputFile = state.outputdir / output_name
    state.htmlOutputFile.parent.mkdir(parents=True, exist_ok=True)
    LOG(f"Output file: {state.htmlOutputFile}", level=2)

    state.envOK = True
    return state


def source_parse(inputstate: ProgramState) -> ProgramState:
    """
    Read the message file and parse it into an abstract syntax tree.

    Args:
        inputstate: Program state with inputSourceFile path set

    Returns:
        ProgramState with added fields:
            - sourceText: Raw message text
            - parsedSource: List[ASTNode] for the message

    Exits:
        1 if the file cannot be read
    """

    state = inputstate.copy()

    LOG("Reading message file...", level=1)

    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
        LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG("Parsing message into AST...", level=1)
    state.parsedSource = Parser(state.sourceText, debug=(state.verbosity >= 3)).parse()
    return state


def html_compile(inputstate: ProgramState) -> ProgramState:
    """
    Serialize the abstract syntax tree to HTML and write the outputs.

    An empty message is valid and produces an empty HTML file.

    Args:
        inputstate: Program state with parsedSource AST

    Returns:
        ProgramState with added field:
            - compileResult: Dict containing:
                - status: bool (formatting success)
                - output_file: str (path to the written HTML)
                - node_count: int (number of top-level nodes)
                - extra_files: list of str (AST / plain-text outputs)

    Exits:
        1 if parsedSource is None or writing fails
    """

    state = inputstate.copy()

    LOG("Serializing AST to HTML...", level=1)

    if state.parsedSource is None:
        print("Error: No parsed source available", file=sys.stderr)
        sys.exit(1)

    serializer = Serializer(highlight=True if state.highlight else None)
    html = serializer.ast_serialize(state.parsedSource)

    extra_files = []
    try:
        state.htmlOutputFile.write_text(html, encoding="utf-8")
        LOG(f"Wrote {state.htmlOutputFile}", level=2)

        if state.emitAST:
            ast_file = state.htmlOutputFile.with_suffix(".ast.json")
            ast_file.write_text(
                json.dumps(ast_toDicts(state.parsedSource), indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
            extra_files.append(str(ast_file))
            LOG(f"Wrote {ast_file}", level=2)

        if state.plainText:
            text_file = state.htmlOutputFile.with_suffix(".txt")
            text_file.write_text(text_extract(state.parsedSource), encoding="utf-8")
            extra_files.append(str(text_file))
            LOG(f"Wrote {text_file}", level=2)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        sys.exit(1)

    state.compileResult = {
        'status': True,
        'output_file': str(state.htmlOutputFile),
        'node_count': len(state.parsedSource),
        'extra_files': extra_files,
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display formatting results to the user.

    Args:
        inputstate: Program state with compileResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if compileResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.compileResult:
        print("Error: Formatting failed", file=sys.stderr)
        sys.exit(1)

    LOG("✓ Formatting successful!", level=1)
    LOG(f"  Output: {state.compileResult['output_file']}", level=1)
    LOG(f"  Nodes:  {state.compileResult['node_count']}", level=1)
    for extra in state.compileResult['extra_files']:
        LOG(f"  Also:   {extra}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="msgmarkup - chat message markup formatter",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - format a message file from markup to HTML.

    Orchestrates the formatting pipeline:
        1. env_check: Validate paths and environment
        2. source_parse: Read and parse the message to an AST
        3. html_compile: Serialize the AST and write outputs
        4. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing the message file
        outputdir: Directory where output will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    sink_configure()
    state_connectToLogger(state)

    pipeline(state, env_check, source_parse, html_compile, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
