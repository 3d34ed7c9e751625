"""
Sample page and selectors for trying the tester out.
"""

SAMPLE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Sample Page</title>
</head>
<body>
    <header class="main-header">
        <nav>
            <ul class="nav-list">
                <li><a href="/" class="nav-link">Home</a></li>
                <li><a href="/about" class="nav-link">About</a></li>
                <li><a href="/contact" class="nav-link">Contact</a></li>
            </ul>
        </nav>
    </header>

    <main class="content">
        <section class="hero">
            <h1 class="title">Welcome to Our Site</h1>
            <p class="description">This is a sample page for testing XPath and CSS selectors.</p>
            <button class="cta-button">Get Started</button>
        </section>

        <section class="features">
            <h2>Features</h2>
            <div class="feature-grid">
                <div class="feature-card" data-feature="responsive">
                    <h3>Responsive Design</h3>
                    <p>Works on all devices</p>
                </div>
                <div class="feature-card" data-feature="fast">
                    <h3>Fast Performance</h3>
                    <p>Optimized for speed</p>
                </div>
                <div class="feature-card" data-feature="secure">
                    <h3>Secure</h3>
                    <p>Built with security in mind</p>
                </div>
            </div>
        </section>
    </main>

    <footer class="main-footer">
        <p>&copy; 2024 Sample Site. All rights reserved.</p>
    </footer>
</body>
</html>"""

SAMPLE_SELECTORS = {
    "xpath": '//div[@class="feature-card"]',
    "css": ".feature-card",
}
