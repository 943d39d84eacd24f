#!/usr/bin/env python3
# USAGE: python main.py --input images/intersection.jpg --output output/intersection.json --model models/yolo11n.pt

import argparse
import logging
import os
import sys

from lightpole.analyzer import TrafficLightAnalyzer
from lightpole.config import EXPORT, YOLO_DETECTION


def setup_logging(log_level=logging.INFO, logger_name='main'):
    """Setup root logger configuration"""
    # Check if root logger already has handlers to avoid duplicate configuration
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=log_level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    # Get the named logger and set its level
    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    return logger


def parse_args(argv=None):
    ap = argparse.ArgumentParser(
        description="Classify traffic light colors and estimate pole heights in an image")
    ap.add_argument("-i", "--input", required=True,
                    help="path to input image")
    ap.add_argument("-o", "--output", required=True,
                    help="path to output results file")
    ap.add_argument("-c", "--confidence", type=float,
                    default=YOLO_DETECTION['DEFAULT_CONFIDENCE'],
                    help="minimum detector score to keep a candidate")
    ap.add_argument("-m", "--model", type=str, default=YOLO_DETECTION['MODEL_PATH'],
                    help="path to YOLO model file")
    ap.add_argument("-l", "--log-level", type=str, default="INFO",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                    help="logging level")
    ap.add_argument("-e", "--export", type=str, default="json",
                    choices=EXPORT['FORMATS'],
                    help="export format for results")
    return vars(ap.parse_args(argv))


def main(argv=None):
    args = parse_args(argv)

    # Setup logging
    log_level = getattr(logging, args["log_level"])
    logger = setup_logging(log_level)

    # Check if input file exists
    if not os.path.exists(args["input"]):
        logger.error(f"Input file does not exist: {args['input']}")
        return 1

    # Ensure output directory exists
    output_dir = os.path.dirname(args["output"])
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)
        logger.info(f"Created output directory: {output_dir}")

    try:
        analyzer = TrafficLightAnalyzer(
            model_path=args["model"],
            confidence=args["confidence"],
            log_level=log_level,
            export_format=args["export"]
        )
        lights = analyzer.analyze_file(args["input"])
        analyzer.export_results(lights, args["output"])

    except Exception as e:
        logger.error(f"Error in traffic light analysis: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
