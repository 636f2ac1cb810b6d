"""
Copy and listings for the informational pages.
"""

NAV_LINKS = [
    {"name": "Home", "href": "/"},
    {"name": "Services", "href": "/services"},
    {"name": "About us", "href": "/about"},
    {"name": "Careers", "href": "/careers"},
    {"name": "Contact", "href": "/contact"},
]

FOOTER_SECTIONS = [
    {
        "title": "Solutions",
        "links": [
            {"name": "Custom Development", "href": "/services"},
            {"name": "Cloud Migration", "href": "/services"},
            {"name": "Data Analytics", "href": "/services"},
            {"name": "Mobile Solutions", "href": "/services"},
        ],
    },
    {
        "title": "Company",
        "links": [
            {"name": "About Us", "href": "/about"},
            {"name": "Careers", "href": "/careers"},
        ],
    },
    {
        "title": "Support",
        "links": [
            {"name": "Contact Support", "href": "/contact"},
        ],
    },
]

SOCIAL_LINKS = [
    {"label": "GitHub", "href": "#"},
    {"label": "LinkedIn", "href": "#"},
    {"label": "Twitter", "href": "#"},
]

# Home page
CAPABILITIES = [
    {"title": "Custom Development", "description": "Tailored solutions for your unique requirements"},
    {"title": "Data Analytics", "description": "Transform data into actionable insights"},
    {"title": "Cloud Solutions", "description": "Scalable infrastructure for modern businesses"},
    {"title": "Mobile Apps", "description": "Native and cross-platform mobile solutions"},
]

HOME_NUMBERS = [
    {"number": "4", "suffix": "+", "label": "Years Experience"},
    {"number": "3", "suffix": "", "label": "Team Members"},
    {"number": "99", "suffix": "%", "label": "Success Rate"},
    {"number": "24", "suffix": "/7", "label": "Support Hours"},
]

# Services page
SERVICES = [
    {
        "title": "Semiconductor Solutions",
        "description": (
            "Advanced semiconductor design and manufacturing solutions for "
            "next-generation technology applications."
        ),
        "features": ["ASIC Design", "FPGA Development", "Verification Services", "Testing Solutions"],
    },
    {
        "title": "Custom Software Development",
        "description": (
            "Tailored software solutions built with cutting-edge technologies to "
            "meet your unique business requirements."
        ),
        "features": ["Web Applications", "Mobile Apps", "Desktop Software", "API Development"],
    },
    {
        "title": "Data Analytics & AI",
        "description": (
            "Transform your data into actionable insights with our advanced "
            "analytics and artificial intelligence solutions."
        ),
        "features": ["Machine Learning", "Data Visualization", "Predictive Analytics", "Business Intelligence"],
    },
    {
        "title": "Cloud Infrastructure",
        "description": (
            "Scalable cloud solutions designed to support your business growth and "
            "digital transformation initiatives."
        ),
        "features": ["Cloud Migration", "DevOps Services", "Infrastructure as Code", "Security Management"],
    },
    {
        "title": "Cybersecurity",
        "description": (
            "Comprehensive security solutions to protect your digital assets and "
            "ensure business continuity."
        ),
        "features": ["Security Audits", "Penetration Testing", "Compliance Management", "Incident Response"],
    },
    {
        "title": "IoT Solutions",
        "description": (
            "End-to-end Internet of Things solutions connecting devices and "
            "enabling smart operations."
        ),
        "features": ["Device Connectivity", "Edge Computing", "Real-time Monitoring", "Predictive Maintenance"],
    },
]

# About page
COMPANY_STORY = (
    "ASOCSEMI was founded in 2021 by a group of VLSI DV Engineers & software "
    "developers with a passion for creating innovative solutions. Over the years, "
    "we have grown into a leading VLSI-SOC&IP service providers and software "
    "development company, serving clients in a wide range of industries."
)

EXPERTISE = [
    {
        "title": "EXPERTISE",
        "description": (
            "Our team consists of experienced software developers and designers who "
            "have worked on a variety of projects. We have expertise in a range of "
            "technologies and tools, including cloud computing, machine learning, "
            "and blockchain technology."
        ),
    },
    {
        "title": "QUALITY",
        "description": (
            "We are committed to delivering high-quality software solutions to our "
            "clients. Our team follows best practices in software development and "
            "testing to ensure that our clients receive a reliable and bug-free product."
        ),
    },
]

ACHIEVEMENTS = [
    {"number": "500+", "label": "Projects Completed"},
    {"number": "50+", "label": "Happy Clients"},
    {"number": "15+", "label": "Years Experience"},
    {"number": "24/7", "label": "Support Available"},
]

# Careers page
JOB_OPENINGS = [
    {
        "title": "Senior VLSI Design Engineer",
        "department": "Engineering",
        "location": "Bangalore, India",
        "type": "Full-time",
        "description": "Lead VLSI design projects for next-generation semiconductor solutions.",
    },
    {
        "title": "Software Developer - AI/ML",
        "department": "Software Development",
        "location": "Hyderabad, India",
        "type": "Full-time",
        "description": "Develop cutting-edge AI and machine learning applications.",
    },
    {
        "title": "Hardware Verification Engineer",
        "department": "Verification",
        "location": "Chennai, India",
        "type": "Full-time",
        "description": "Verify complex hardware designs using industry-standard methodologies.",
    },
    {
        "title": "Product Manager - IoT Solutions",
        "department": "Product",
        "location": "Mumbai, India",
        "type": "Full-time",
        "description": "Drive product strategy for innovative IoT solutions.",
    },
    {
        "title": "DevOps Engineer",
        "department": "Infrastructure",
        "location": "Remote",
        "type": "Full-time",
        "description": "Build and maintain scalable cloud infrastructure and deployment pipelines.",
    },
    {
        "title": "UI/UX Designer",
        "department": "Design",
        "location": "Pune, India",
        "type": "Full-time",
        "description": "Create intuitive and engaging user experiences for our technology platforms.",
    },
]

BENEFITS = [
    {
        "title": "Collaborative Environment",
        "description": "Work with talented professionals in a supportive team atmosphere",
    },
    {
        "title": "Career Growth",
        "description": "Continuous learning opportunities and clear advancement paths",
    },
    {
        "title": "Work-Life Balance",
        "description": "Flexible working hours and remote work options",
    },
]

EXPERIENCE_LEVELS = ["0-1 years", "1-3 years", "3-5 years", "5-10 years", "10+ years"]

# Contact page
CONTACT_DETAILS = {
    "emails": ["contact@asocsemi.com", "support@asocsemi.com"],
    "phones": ["+1 (555) 123-4567", "+1 (555) 987-6543"],
    "office": ["123 Tech Street", "Innovation District", "San Francisco, CA 94102"],
}

OFFICE_HOURS = [
    {"days": "Monday - Friday", "hours": "9:00 AM - 6:00 PM"},
    {"days": "Saturday", "hours": "10:00 AM - 4:00 PM"},
    {"days": "Sunday", "hours": "Closed"},
]

STATUS_OPTIONS = ["pending", "reviewing", "approved", "rejected"]
