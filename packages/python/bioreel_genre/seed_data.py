from bioreel_core.types import TrainingExample

# Small starter corpus, one profile archetype per line. Tune freely; the
# model only ever adds counts on top of it.
SEED_TRAINING = [
    # Sci-Fi / tech
    TrainingExample("software engineer backend node javascript python ai machine learning", "Sci-Fi"),
    TrainingExample("computer science developer full stack api oauth systems", "Sci-Fi"),
    TrainingExample("data engineer ml ai analytics sql database", "Sci-Fi"),
    TrainingExample("robotics engineer distributed systems cloud", "Sci-Fi"),
    # Action / sports / high energy
    TrainingExample("athlete captain soccer competitive fast paced", "Action"),
    TrainingExample("founder startup builder ship product hustle", "Action"),
    TrainingExample("fitness gym training performance discipline", "Action"),
    # Thriller / security / intensity
    TrainingExample("security reverse engineering c c++ low level cryptography", "Thriller"),
    TrainingExample("debugging deep dive intense problem solver", "Thriller"),
    TrainingExample("firmware embedded systems hardware", "Thriller"),
    # Drama / creative / people
    TrainingExample("designer ui ux art music film cinema writer storytelling", "Drama"),
    TrainingExample("education teaching community culture sociology", "Drama"),
    TrainingExample("dance theatre performance", "Drama"),
    # Mystery / research / analysis
    TrainingExample("research investigation evidence analysis patterns", "Mystery"),
    TrainingExample("law policy reasoning", "Mystery"),
    # Romance / empathy / relationships
    TrainingExample("community empathy people relationships communication", "Romance"),
    TrainingExample("social work counseling care psychology", "Romance"),
]
