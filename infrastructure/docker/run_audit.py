"""
Docker container entrypoint for one-shot page audit jobs.

Receives job parameters via environment variables, audits one page, then
POSTs the result back to the callback endpoint.

Environment variables:
    JOB_ID          - Identifier of the audit job
    START_URL       - URL to fetch and audit
    HTML_FILE       - Path to an HTML file to audit instead of fetching
    SOURCE_URL      - Source URL for HTML_FILE (default: canonical/og:url in the file)
    CALLBACK_URL    - Endpoint to POST results to
    API_KEY         - Bearer token for the callback
    PAGELENS_*      - Audit options, see pagelens.audit.config
"""

import os
import sys
import asyncio
import logging
from pathlib import Path

import httpx

from pagelens.audit import AuditOptions, PageAnalyzer
from pagelens.service import detect_source_url, validate_url

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger("pagelens-runner")


async def run():
    job_id = os.environ["JOB_ID"]
    callback_url = os.environ["CALLBACK_URL"]
    api_key = os.environ["API_KEY"]
    start_url = os.environ.get("START_URL")
    html_file = os.environ.get("HTML_FILE")

    analyzer = PageAnalyzer(options=AuditOptions.from_env())

    try:
        if html_file:
            html = Path(html_file).read_text(encoding="utf-8", errors="replace")
            source_url = detect_source_url(html, os.environ.get("SOURCE_URL") or start_url)
            logger.info(f"Starting audit job {job_id} for {html_file} (source={source_url})")
            result = analyzer.analyze_html(html, source_url)
        elif start_url:
            logger.info(f"Starting audit job {job_id} for {start_url}")
            result = await analyzer.analyze_url(validate_url(start_url))
        else:
            raise ValueError("START_URL or HTML_FILE is required")

        logger.info(
            f"Audit complete. Score: {result.score}/100 "
            f"({result.summary.critical_issues} critical, {result.summary.high_issues} high)"
        )

        payload = {
            "status": "completed",
            "job_id": job_id,
            "result": result.to_dict(),
        }

        # POST results back to the callback
        async with httpx.AsyncClient(timeout=120) as client:
            resp = await client.post(
                callback_url,
                json=payload,
                headers={"Authorization": f"Bearer {api_key}"},
            )
            resp.raise_for_status()

        logger.info(f"Results posted to {callback_url}. Done.")

    except Exception as e:
        logger.error(f"Audit failed: {e}", exc_info=True)
        # Report failure to the callback
        try:
            async with httpx.AsyncClient(timeout=30) as client:
                await client.post(
                    callback_url,
                    json={"status": "failed", "job_id": job_id, "error": str(e)},
                    headers={"Authorization": f"Bearer {api_key}"},
                )
        except httpx.HTTPError:
            logger.error("Failed to report error to callback URL")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(run())
