import csv
import random

from members.models import MemberRole

FIRST_NAMES = ["John", "Jane", "Mike", "Sarah", "Tom", "Emily", "Chris", "Dana", "Pat", "Alex"]
LAST_NAMES = ["Doe", "Smith", "Miller", "Garcia", "Brown", "Keller", "Walsh", "Ortiz", "Reyes", "Novak"]
QUALIFICATIONS = ["EMT", "Interior", "Ladder Driver", "Pump Operator", "Exterior", "Rescue Tech"]


def generate_mock_members(filename="mock_members_100.csv", count=100):
    # Base coordinate roughly at the firehouse (the map's default centre).
    base_lat = 41.340992
    base_lng = -74.168008

    with open(filename, mode='w', newline='') as file:
        writer = csv.writer(file)
        writer.writerow([
            "member_id", "first_name", "last_name", "fd_id_number",
            "role", "status", "qualifications", "lat", "lng",
        ])

        for i in range(count):
            member_id = f"MBR-{str(i+1).zfill(3)}"

            # Scatter members randomly around the firehouse (roughly +/- 8km)
            lat = base_lat + (random.random() - 0.5) * 0.15
            lng = base_lng + (random.random() - 0.5) * 0.15

            # ~5% have never been geocoded and get no coordinates
            has_location = random.random() >= 0.05

            role = random.choice(list(MemberRole)).value
            status = "REGULAR" if random.random() < 0.8 else "LOW"
            qualifications = ";".join(random.sample(QUALIFICATIONS, random.randint(0, 3)))

            writer.writerow([
                member_id,
                random.choice(FIRST_NAMES),
                random.choice(LAST_NAMES),
                str(100 + i),
                role,
                status,
                qualifications,
                round(lat, 6) if has_location else "",
                round(lng, 6) if has_location else "",
            ])

    print(f"Successfully generated {count} mock members into '{filename}'.")

if __name__ == "__main__":
    generate_mock_members()
