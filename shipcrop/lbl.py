#!/usr/bin/env python3
"""
shipcrop: marketplace shipping label cropper

Usage:
  1. Crop a label PDF for a platform:
       shipcrop input.pdf -o output.pdf --platform FLIPKART
  2. Merge several PDFs, then crop:
       shipcrop a.pdf b.pdf -o output.pdf --platform MEESHO --variant with_invoice
  3. Keep only order pages and stamp SKUs:
       shipcrop input.pdf -o output.pdf --platform AMAZON --option order_page --sku
  4. Show the known platforms:
       shipcrop --list

All coordinates are in PDF points, measured from the top-left corner.
"""

import argparse
import logging
import sys

from .cords import LABEL_CONFIGS, load_registry
from .errors import ShipCropError
from .pipeline import Mode, process_labels

POINTS_PER_INCH = 72.0


def describe_region(region):
    return (
        f"({region.tlx:g}, {region.tly:g}) - ({region.brx:g}, {region.bry:g})  "
        f"{region.width / POINTS_PER_INCH:.2f} x {region.height / POINTS_PER_INCH:.2f} in"
    )


def print_registry(registry):
    for platform_id, config in registry.items():
        flag = "  [crop disabled]" if config.disable_crop else ""
        print(f"{platform_id}: {config.label}  {describe_region(config.region)}{flag}")
        for variant in config.variants:
            print(f"    variant {variant.id}: {variant.label}  {describe_region(variant.region)}")
        for option in config.options:
            print(f"    option  {option.id}: {option.label}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="shipcrop", description="Crop marketplace shipping labels for thermal printers."
    )
    parser.add_argument("inputs", nargs="*", help="input PDF files, merged in this order")
    parser.add_argument("-o", "--output", help="output PDF file")
    parser.add_argument("--platform", help="platform id, e.g. FLIPKART")
    parser.add_argument("--variant", help="variant id of the platform")
    parser.add_argument("--option", action="append", default=[], dest="options",
                        help="page option id; may be repeated")
    parser.add_argument("--sku", action="store_true", help="stamp the SKU found on each page")
    parser.add_argument("--merge", action="store_true", help="merge even a single input")
    parser.add_argument("--config", help="JSON file with extra or replacement platforms")
    parser.add_argument("--list", action="store_true", help="list platforms and exit")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        registry = load_registry(args.config) if args.config else LABEL_CONFIGS
    except (OSError, ValueError, KeyError) as exc:
        print(f"Could not read config {args.config}: {exc}")
        return 1

    if args.list:
        print_registry(registry)
        return 0
    if not args.inputs or not args.output:
        build_parser().print_usage()
        return 1

    buffers = []
    for path in args.inputs:
        try:
            with open(path, "rb") as f:
                buffers.append(f.read())
        except OSError as exc:
            print(f"Could not read {path}: {exc}")
            return 1

    try:
        data = process_labels(
            buffers,
            mode=Mode.MERGE if args.merge else Mode.CROP,
            platform=args.platform,
            variant=args.variant,
            extract_sku=args.sku,
            options=args.options,
            registry=registry,
        )
    except ShipCropError as exc:
        print(f"Label run failed: {exc}")
        return 1

    with open(args.output, "wb") as f:
        f.write(data)
    print(f"Labels saved to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
