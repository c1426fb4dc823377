# Built-in question bank used when no CSV files are available.

CATEGORIES = [
    {
        "slug": "physics",
        "name": "Physics",
        "description": "Test your knowledge on motion, energy, electricity, and the laws that govern the universe.",
    },
    {
        "slug": "chemistry",
        "name": "Chemistry",
        "description": "Explore chemical reactions, the periodic table, acids, bases, and the building blocks of matter.",
    },
    {
        "slug": "biology",
        "name": "Biology",
        "description": "Dive into the world of living organisms, from cellular processes to complex ecosystems.",
    },
    {
        "slug": "mathematics",
        "name": "Mathematics",
        "description": "Sharpen your skills in algebra, geometry, trigonometry, and statistical analysis.",
    },
    {
        "slug": "history",
        "name": "History",
        "description": "Journey through time and test your knowledge of major world events and civilizations.",
    },
    {
        "slug": "geography",
        "name": "Geography",
        "description": "Discover the Earth's landscapes, environments, and the relationship between people and their planet.",
    },
]

QUESTIONS = [
    # Physics
    {
        "id": "phy-1",
        "category": "physics",
        "question_text": "What is the SI unit of force?",
        "options": ["Joule", "Watt", "Newton", "Pascal"],
        "correct_answer_index": 2,
        "explanation": "The Newton (N) is the force needed to accelerate one kilogram at one metre per second squared.",
    },
    {
        "id": "phy-2",
        "category": "physics",
        "question_text": "What is the SI unit of electric current?",
        "options": ["Volt", "Ampere", "Ohm", "Watt"],
        "correct_answer_index": 1,
        "explanation": "The Ampere (A) is named after André-Marie Ampère.",
    },
    {
        "id": "phy-3",
        "category": "physics",
        "question_text": "Which quantity is conserved in a perfectly elastic collision but not in an inelastic one?",
        "options": ["Momentum", "Kinetic energy", "Mass", "Charge"],
        "correct_answer_index": 1,
        "explanation": "Momentum is conserved in both cases; kinetic energy only in elastic collisions.",
    },
    {
        "id": "phy-4",
        "category": "physics",
        "question_text": "Ohm's law relates voltage, current and what?",
        "options": ["Power", "Capacitance", "Inductance", "Resistance"],
        "correct_answer_index": 3,
        "explanation": "V = I × R.",
    },
    {
        "id": "phy-5",
        "category": "physics",
        "question_text": "What is the approximate speed of light in a vacuum?",
        "options": ["3 × 10^8 m/s", "3 × 10^6 m/s", "3 × 10^5 km/h", "343 m/s"],
        "correct_answer_index": 0,
        "explanation": "Light travels at about 299,792,458 m/s in a vacuum.",
    },
    # Chemistry
    {
        "id": "chem-1",
        "category": "chemistry",
        "question_text": "Which element has the atomic number 1?",
        "options": ["Helium", "Oxygen", "Hydrogen", "Carbon"],
        "correct_answer_index": 2,
        "explanation": "Hydrogen has one proton in its nucleus.",
    },
    {
        "id": "chem-2",
        "category": "chemistry",
        "question_text": "What is the chemical formula for water?",
        "options": ["CO2", "O2", "H2O", "NaCl"],
        "correct_answer_index": 2,
        "explanation": "Each water molecule has two hydrogen atoms and one oxygen atom.",
    },
    {
        "id": "chem-3",
        "category": "chemistry",
        "question_text": "A solution with a pH of 3 is:",
        "options": ["Neutral", "Acidic", "Basic", "Saturated"],
        "correct_answer_index": 1,
        "explanation": "Solutions below pH 7 are acidic.",
    },
    {
        "id": "chem-4",
        "category": "chemistry",
        "question_text": "Which gas is produced when zinc reacts with hydrochloric acid?",
        "options": ["Oxygen", "Chlorine", "Carbon dioxide", "Hydrogen"],
        "correct_answer_index": 3,
        "explanation": "Zn + 2HCl → ZnCl2 + H2.",
    },
    # Biology
    {
        "id": "bio-1",
        "category": "biology",
        "question_text": "Which part of the plant is responsible for photosynthesis?",
        "options": ["Root", "Stem", "Flower", "Leaf"],
        "correct_answer_index": 3,
        "explanation": "Leaves contain chlorophyll, the pigment that captures light energy.",
    },
    {
        "id": "bio-2",
        "category": "biology",
        "question_text": "What is the powerhouse of the cell?",
        "options": ["Nucleus", "Ribosome", "Mitochondrion", "Chloroplast"],
        "correct_answer_index": 2,
        "explanation": "Mitochondria produce most of the cell's ATP.",
    },
    {
        "id": "bio-3",
        "category": "biology",
        "question_text": "DNA is made up of units called:",
        "options": ["Amino acids", "Nucleotides", "Fatty acids", "Monosaccharides"],
        "correct_answer_index": 1,
        "explanation": "Each nucleotide has a sugar, a phosphate group and a nitrogenous base.",
    },
    {
        "id": "bio-4",
        "category": "biology",
        "question_text": "Which blood cells carry oxygen?",
        "options": ["Red blood cells", "White blood cells", "Platelets", "Plasma cells"],
        "correct_answer_index": 0,
        "explanation": "Red blood cells carry oxygen bound to haemoglobin.",
    },
    # Mathematics
    {
        "id": "math-1",
        "category": "mathematics",
        "question_text": "What is the square root of 144?",
        "options": ["10", "11", "12", "14"],
        "correct_answer_index": 2,
        "explanation": "12 × 12 = 144.",
    },
    {
        "id": "math-2",
        "category": "mathematics",
        "question_text": "What is the value of Pi to two decimal places?",
        "options": ["3.12", "3.14", "3.16", "3.18"],
        "correct_answer_index": 1,
        "explanation": "Pi is approximately 3.14159.",
    },
    {
        "id": "math-3",
        "category": "mathematics",
        "question_text": "What is the sum of the interior angles of a triangle?",
        "options": ["90°", "180°", "270°", "360°"],
        "correct_answer_index": 1,
        "explanation": "The interior angles of any triangle add up to 180 degrees.",
    },
    {
        "id": "math-4",
        "category": "mathematics",
        "question_text": "What is sin(90°)?",
        "options": ["0", "0.5", "1", "-1"],
        "correct_answer_index": 2,
        "explanation": "The sine of a right angle is 1.",
    },
    # History
    {
        "id": "hist-1",
        "category": "history",
        "question_text": "In which year did World War I begin?",
        "options": ["1914", "1918", "1939", "1945"],
        "correct_answer_index": 0,
        "explanation": "World War I began in 1914 after the assassination of Archduke Franz Ferdinand.",
    },
    {
        "id": "hist-2",
        "category": "history",
        "question_text": "Who was the first President of the United States?",
        "options": ["Abraham Lincoln", "Thomas Jefferson", "George Washington", "John Adams"],
        "correct_answer_index": 2,
        "explanation": "George Washington served from 1789 to 1797.",
    },
    {
        "id": "hist-3",
        "category": "history",
        "question_text": "The Berlin Wall fell in which year?",
        "options": ["1985", "1989", "1991", "1993"],
        "correct_answer_index": 1,
        "explanation": "The wall was opened on 9 November 1989.",
    },
    {
        "id": "hist-4",
        "category": "history",
        "question_text": "Which civilization built Machu Picchu?",
        "options": ["Aztec", "Maya", "Inca", "Olmec"],
        "correct_answer_index": 2,
        "explanation": "Machu Picchu was built by the Inca in the 15th century.",
    },
    # Geography
    {
        "id": "geo-1",
        "category": "geography",
        "question_text": "Which is the largest continent by land area?",
        "options": ["Africa", "North America", "Asia", "Europe"],
        "correct_answer_index": 2,
        "explanation": "Asia covers about 30% of Earth's land area.",
    },
    {
        "id": "geo-2",
        "category": "geography",
        "question_text": "What is the longest river in the world?",
        "options": ["Amazon River", "Nile River", "Yangtze River", "Mississippi River"],
        "correct_answer_index": 1,
        "explanation": "The Nile flows for about 6,650 kilometres.",
    },
    {
        "id": "geo-3",
        "category": "geography",
        "question_text": "Which ocean is the largest?",
        "options": ["Atlantic", "Indian", "Arctic", "Pacific"],
        "correct_answer_index": 3,
        "explanation": "The Pacific covers roughly a third of the Earth's surface.",
    },
    {
        "id": "geo-4",
        "category": "geography",
        "question_text": "Mount Everest lies on the border of Nepal and which country?",
        "options": ["India", "China", "Bhutan", "Pakistan"],
        "correct_answer_index": 1,
        "explanation": "Everest sits on the Nepal–China (Tibet) border.",
    },
]
