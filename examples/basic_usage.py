#!/usr/bin/env python3
"""Basic usage examples for the file-vfs library."""

import logging
import tempfile

from file_vfs import (
    FileSystemNormalizer,
    InaccessibleFileError,
    LocalFileSystemDriver,
    LockContentionError,
    Mode,
    RetryableOperation,
    lock_path_for,
)
from filelock import FileLock


def file_system_example():
    """Demonstrate whole-file operations on a connected directory."""
    print("=== File System Example ===")

    with tempfile.TemporaryDirectory() as temp_dir:
        driver = LocalFileSystemDriver()
        fs = driver.connect(temp_dir)

        fs.make_directory("docs")
        fs.put("docs/readme.txt", "Hello, World!\n")
        fs.write("docs/readme.txt", "Appended line.\n")
        print(f"Content: {fs.get('docs/readme.txt')!r}")

        fs.copy("docs/readme.txt", "docs/copy.txt")
        fs.move("docs/copy.txt", "moved.txt")
        print(f"Root entries: {fs.list()}")
        print(f"Docs entries: {fs.list('docs')}")
        print(f"Path info: {fs.get_path_info('moved.txt')}")

        fs.set_file_mode("moved.txt", 0o600)
        print(f"Mode: {oct(fs.get_file_mode('moved.txt'))}")

        # Paths outside the root are refused
        try:
            fs.get("../outside.txt")
        except InaccessibleFileError as e:
            print(f"Refused: {e}")

        driver.disconnect(fs)


def line_editing_example():
    """Demonstrate random access editing by line number."""
    print("\n=== Line Editing Example ===")

    with tempfile.TemporaryDirectory() as temp_dir:
        fs = LocalFileSystemDriver().connect(temp_dir)
        fs.put("todo.txt", "buy milk\nwalk dog\nwrite report\n")

        with fs.get_file_iterable("todo.txt", Mode.LINE) as lines:
            print(f"Line 1: {lines[1]!r}")

            # Same length rewrites happen in place
            lines[1] = "feed dog"
            # Different lengths shift the rest of the file
            lines[0] = "buy oat milk"
            del lines[2]
            lines.append("call mom")

            # Writing past the end pads with blank lines
            lines[6] = "plan holiday"

            for position, line in lines.items():
                print(f"  {position}: {line.decode()}")

        print(f"Final content: {fs.get('todo.txt')!r}")


def chunk_editing_example():
    """Demonstrate random access editing of fixed-size chunks."""
    print("\n=== Chunk Editing Example ===")

    with tempfile.TemporaryDirectory() as temp_dir:
        fs = LocalFileSystemDriver().connect(temp_dir)
        fs.put("records.bin", b"AAAABBBBCCCC")

        with fs.get_file_iterable("records.bin", Mode.CHUNK, chunk_size=4) as chunks:
            chunks[1] = b"bbbb"
            chunks[2] = b"cc"
            chunks.append(b"DDDD")

            chunks.rewind()
            while chunks.is_valid():
                print(f"  Chunk {chunks.position()}: {chunks.current()!r}")
                chunks.advance()

        print(f"Final content: {fs.get('records.bin')!r}")


def locking_example():
    """Demonstrate retrying writes that meet a held lock."""
    print("\n=== Locking Example ===")

    with tempfile.TemporaryDirectory() as temp_dir:
        fs = LocalFileSystemDriver().connect(temp_dir)
        fs.put("counter.txt", "0\n")

        with fs.get_file_iterable("counter.txt", Mode.LINE) as counter:
            # Another writer holds the lock
            with FileLock(lock_path_for(fs.realpath("counter.txt"))):
                try:
                    counter.set(0, "1")
                except LockContentionError as e:
                    print(f"Contention: {e}")

            retry = RetryableOperation(max_retries=3, base_delay=0.01)
            retry.execute(lambda: counter.set(0, "2"))
            print(f"Counter: {fs.get('counter.txt')!r}")


def normalizer_example():
    """Demonstrate converting structured files to values and back."""
    print("\n=== Normalizer Example ===")

    with tempfile.TemporaryDirectory() as temp_dir:
        driver = LocalFileSystemDriver(FileSystemNormalizer())
        fs = driver.connect(temp_dir)
        normalizer = driver.get_file_system_normalizer()

        config = {"name": "example", "debug": True, "workers": 4}
        normalizer.denormalize_to_file(fs, "config.yaml", config)
        normalizer.denormalize_to_file(fs, "config.json", config)

        rows = [{"id": "1", "name": "alpha"}, {"id": "2", "name": "beta"}]
        normalizer.denormalize_to_file(fs, "rows.csv", rows)

        print(f"YAML on disk:\n{fs.get('config.yaml').decode()}")
        print(f"From JSON: {normalizer.normalize_from_file(fs, 'config.json')}")
        print(f"From CSV: {normalizer.normalize_from_file(fs, 'rows.csv')}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    file_system_example()
    line_editing_example()
    chunk_editing_example()
    locking_example()
    normalizer_example()

    print("\n=== All examples completed successfully! ===")
