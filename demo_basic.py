import asyncio
import logging
import sys

from pagelens.audit import PageAnalyzer

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

SAMPLE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Handmade Ceramic Mugs | Clayworks Studio</title>
  <link rel="canonical" href="https://clayworks.example/mugs">
  <script src="http://cdn.clayworks.example/app.js"></script>
</head>
<body>
  <header><nav><a href="/">Home</a> <a href="/about">About</a></nav></header>
  <main>
    <h1>Handmade Ceramic Mugs</h1>
    <h1>Our Collection</h1>
    <p>In today's fast-paced world, it's important to note that we leverage traditional techniques.</p>
    <img src="/img/mug-blue.jpg">
    <a href="#">click here</a>
  </main>
</body>
</html>
"""


def example_1_pasted_html():
    print("\n" + "=" * 60)
    print("Example 1: audit pasted HTML")
    print("=" * 60)

    analyzer = PageAnalyzer()
    result = analyzer.analyze_html(SAMPLE_HTML, source_url="https://clayworks.example/mugs")
    print(f"Score: {result.score}/100")
    print(f"Summary: {result.summary.model_dump()}")
    print("\nTop issues:")
    for issue in result.issues_by_severity()[:8]:
        print(f"  [{issue.severity.value:8}] {issue.id}: {issue.issue}")
    print("\nPassed:")
    for note in result.passed[:5]:
        print(f"  - {note}")


async def example_2_live_url(url: str):
    print("\n" + "=" * 60)
    print(f"Example 2: audit {url}")
    print("=" * 60)

    analyzer = PageAnalyzer()
    result = await analyzer.analyze_url(url)
    print(f"Score: {result.score}/100")
    print(f"robots.txt found: {result.technical.robots_txt.found}")
    print(f"Sitemap found: {result.technical.sitemap.found}")
    if result.security.security_headers:
        print(f"Security headers score: {result.security.security_headers.score}/100")
    for issue in result.issues_by_severity()[:5]:
        print(f"  [{issue.severity.value:8}] {issue.id}: {issue.issue}")


def main():
    example_1_pasted_html()
    if len(sys.argv) > 1:
        asyncio.run(example_2_live_url(sys.argv[1]))


if __name__ == "__main__":
    main()
